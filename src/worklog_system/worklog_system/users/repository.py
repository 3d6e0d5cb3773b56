from __future__ import annotations

from typing import Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Read-only view over users.

    Note (DIP): the rollover service depends on this interface, not on a concrete DB.
    """

    def list_active(self) -> Sequence[User]:
        raise NotImplementedError
