from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from structlog.stdlib import BoundLogger

from ..common.logging import get_logger
from ..core.enums import RunStatus
from ..core.exceptions import StoreError
from .model import RolloverRun
from .repository import RolloverRunRepository


class RunLogger:
    """Persists one summary row per executed batch.

    A failed write is logged and swallowed: the batch's effects are already
    committed by the time it is recorded.
    """

    def __init__(self, runs: RolloverRunRepository, *, logger: BoundLogger | None = None):
        self._runs = runs
        self._log = logger or get_logger(__name__)

    def record(
        self,
        *,
        execution_date: date,
        execution_time: datetime,
        success_count: int,
        error_count: int,
    ) -> Optional[RolloverRun]:
        run = RolloverRun(
            execution_date=execution_date,
            execution_time=execution_time,
            users_processed=int(success_count),
            errors_count=int(error_count),
            status=RunStatus.SUCCESS if int(error_count) == 0 else RunStatus.PARTIAL_SUCCESS,
        )
        try:
            self._runs.append(run)
        except StoreError as exc:
            self._log.error("rollover_run_log_failed", execution_date=execution_date.isoformat(), error=str(exc))
            return None
        return run

    def latest(self) -> Optional[RolloverRun]:
        try:
            return self._runs.latest()
        except StoreError as exc:
            self._log.error("rollover_run_status_failed", error=str(exc))
            return None
