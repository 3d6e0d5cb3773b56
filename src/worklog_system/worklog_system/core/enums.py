from __future__ import annotations

from enum import Enum


class RunStatus(str, Enum):
    """Outcome of one batch execution, stored in rollover_runs.status."""

    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"


class DayOutcome(str, Enum):
    """Result of rolling one day over into the next for one user."""

    SKIPPED = "skipped"
    NOTHING_TO_CARRY = "nothing_to_carry"
    UNCHANGED = "unchanged"
    MERGED = "merged"
    FAILED = "failed"
