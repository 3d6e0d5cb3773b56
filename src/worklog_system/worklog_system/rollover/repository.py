from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import RolloverRun, RolloverState


class RolloverStateRepository(Protocol):
    def get_or_create(self, user_id: str) -> RolloverState:
        """Return the user's state, inserting the epoch sentinel when absent.

        Raises StoreReadError when the read fails and StoreWriteError when the
        insert fails.
        """

        raise NotImplementedError

    def update(self, user_id: str, last_rollover_date: date) -> None:
        raise NotImplementedError


class RolloverRunRepository(Protocol):
    def append(self, run: RolloverRun) -> None:
        raise NotImplementedError

    def latest(self) -> Optional[RolloverRun]:
        raise NotImplementedError
