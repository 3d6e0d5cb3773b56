from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.constants import EPOCH_SENTINEL
from ..core.enums import RunStatus


@dataclass(frozen=True)
class RolloverState:
    """Last calendar date whose rollover has been applied for a user."""

    user_id: str
    last_rollover_date: date = EPOCH_SENTINEL

    @classmethod
    def never_processed(cls, user_id: str) -> "RolloverState":
        return cls(user_id=user_id, last_rollover_date=EPOCH_SENTINEL)


@dataclass(frozen=True)
class RolloverRun:
    """Append-only summary of one batch execution."""

    execution_date: date
    execution_time: datetime
    users_processed: int
    errors_count: int
    status: RunStatus

    def to_dict(self) -> dict:
        return {
            "executionDate": self.execution_date.isoformat(),
            "executionTime": self.execution_time.isoformat(),
            "usersProcessed": self.users_processed,
            "errorsCount": self.errors_count,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class BatchResult:
    success_count: int = 0
    error_count: int = 0
    # Users already caught up; neither a success nor an error.
    skipped_count: int = 0

    def to_dict(self) -> dict:
        return {"success": self.success_count, "errors": self.error_count}


@dataclass(frozen=True)
class GateDecision:
    should_run: bool
    current_time: datetime


@dataclass(frozen=True)
class UserRolloverReport:
    """What happened for one user during a batch (used for logging/tests)."""

    user_id: str
    days_walked: int
    failed_days: tuple[date, ...]
    advanced_to: date
