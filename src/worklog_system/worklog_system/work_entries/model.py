from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class WorkEntry:
    """Domain entity: one user's work entry for one calendar date.

    Task ids are kept as tuples without duplicates; order is storage order and
    carries no meaning.
    """

    entry_id: int
    user_id: str
    work_date: date
    assigned_tasks: tuple[str, ...] = ()
    completed_tasks: tuple[str, ...] = ()
    check_in_time: Optional[time] = None
    check_out_time: Optional[time] = None
    is_absent: bool = False
    updated_at: Optional[datetime] = None

    def unfinished_tasks(self) -> tuple[str, ...]:
        completed = set(self.completed_tasks)
        return tuple(t for t in self.assigned_tasks if t not in completed)
