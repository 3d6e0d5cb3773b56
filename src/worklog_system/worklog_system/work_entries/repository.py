from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import WorkEntry


class WorkEntryRepository(Protocol):
    """Per-user, per-date work entries.

    Every method may raise StoreReadError/StoreWriteError.
    """

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[WorkEntry]:
        raise NotImplementedError

    def create(self, *, user_id: str, work_date: date) -> WorkEntry:
        """Create an empty entry (no tasks, no check-in/out, not absent).

        If the entry already exists (a concurrent invocation created it), the
        existing entry is returned.
        """

        raise NotImplementedError

    def update_assigned_tasks(
        self,
        *,
        entry_id: int,
        assigned_tasks: Sequence[str],
        updated_at: datetime,
    ) -> WorkEntry:
        raise NotImplementedError
