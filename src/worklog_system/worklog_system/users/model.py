from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: the slice of a user the rollover batch reads.

    Note: plain data object (no DB access code).
    """

    user_id: str
    username: str
    full_name: Optional[str] = None
    is_active: bool = True
