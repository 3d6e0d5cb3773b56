from __future__ import annotations

from datetime import date
from typing import Any, Optional

from structlog.stdlib import BoundLogger

from ..common.datetime_utils import CivilClock
from ..common.logging import get_logger
from ..core.constants import DEFAULT_ROLLOVER_HOUR
from ..core.exceptions import ValidationError
from .model import GateDecision
from .run_logger import RunLogger
from .service import BatchRolloverService


class InvocationGate:
    """Lets the batch run only during the civil rollover hour.

    Only a coarse scheduling hint: overlapping runs inside the window are safe.
    """

    def __init__(self, clock: CivilClock, *, rollover_hour: int = DEFAULT_ROLLOVER_HOUR):
        if not 0 <= int(rollover_hour) <= 23:
            raise ValidationError("rollover_hour must be between 0 and 23")
        self._clock = clock
        self._hour = int(rollover_hour)

    def evaluate(self) -> GateDecision:
        now = self._clock.now()
        return GateDecision(should_run=now.hour == self._hour, current_time=now)


class RolloverTrigger:
    """Single entry point for scheduled and manual invocations.

    Returns the JSON-ready payload; partial failures are reported as counts.
    """

    def __init__(
        self,
        gate: InvocationGate,
        batch: BatchRolloverService,
        run_logger: RunLogger,
        *,
        logger: BoundLogger | None = None,
    ):
        self._gate = gate
        self._batch = batch
        self._run_logger = run_logger
        self._log = logger or get_logger(__name__)

    def invoke(self, *, force: bool = False, target_date: Optional[date] = None) -> dict[str, Any]:
        decision = self._gate.evaluate()
        current_time = decision.current_time.isoformat()

        self._log.info(
            "rollover_triggered",
            current_time=current_time,
            should_run=decision.should_run,
            force=force,
        )

        if not decision.should_run and not force:
            return {"message": "Not rollover time", "currentTime": current_time, "shouldRun": False}

        target = target_date or decision.current_time.date()
        result = self._batch.run_for_target(target)
        self._run_logger.record(
            execution_date=target,
            execution_time=decision.current_time,
            success_count=result.success_count,
            error_count=result.error_count,
        )

        return {
            "message": "Rollover completed",
            "currentTime": current_time,
            "result": result.to_dict(),
            "shouldRun": True,
        }

    def status(self) -> dict[str, Any]:
        run = self._run_logger.latest()
        return run.to_dict() if run else {}
