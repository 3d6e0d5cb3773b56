from __future__ import annotations

from datetime import date, timedelta
from itertools import islice

from structlog.stdlib import BoundLogger

from ..common.datetime_utils import iter_days
from ..common.logging import get_logger, log_context
from ..core.constants import DEFAULT_MAX_DAYS_BACK, DEFAULT_MAX_DAYS_TO_PROCESS
from ..core.enums import DayOutcome
from ..core.exceptions import StoreError, StoreWriteError, ValidationError
from ..users.repository import UserRepository
from .model import BatchResult, RolloverState, UserRolloverReport
from .processor import DayRolloverProcessor
from .repository import RolloverStateRepository

ONE_DAY = timedelta(days=1)


class BatchRolloverService:
    """Brings every active user's work entries up to a target date.

    Users are handled one at a time and never affect each other's outcome. For
    each user, days are rolled strictly oldest first because a task carried into
    day N must be able to carry again into day N+1.
    """

    def __init__(
        self,
        users: UserRepository,
        states: RolloverStateRepository,
        processor: DayRolloverProcessor,
        *,
        max_days_back: int = DEFAULT_MAX_DAYS_BACK,
        max_days_to_process: int = DEFAULT_MAX_DAYS_TO_PROCESS,
        hold_on_failed_day: bool = False,
        logger: BoundLogger | None = None,
    ):
        if int(max_days_back) < 1:
            raise ValidationError("max_days_back must be at least 1")
        if int(max_days_to_process) < 1:
            raise ValidationError("max_days_to_process must be at least 1")

        self._users = users
        self._states = states
        self._processor = processor
        self._max_days_back = int(max_days_back)
        self._max_days_to_process = int(max_days_to_process)
        self._hold_on_failed_day = bool(hold_on_failed_day)
        self._log = logger or get_logger(__name__)

    def run_for_target(self, target_date: date) -> BatchResult:
        try:
            users = list(self._users.list_active())
        except StoreError as exc:
            self._log.error("rollover_users_fetch_failed", target_date=target_date.isoformat(), error=str(exc))
            return BatchResult(success_count=0, error_count=1)

        if not users:
            self._log.info("rollover_no_active_users", target_date=target_date.isoformat())
            return BatchResult()

        self._log.info("rollover_batch_started", target_date=target_date.isoformat(), users=len(users))

        success = errors = skipped = 0
        for user in users:
            with log_context(user_id=user.user_id):
                try:
                    report = self.roll_user(user.user_id, target_date)
                except Exception:
                    errors += 1
                    self._log.exception("rollover_user_failed", user_id=user.user_id, target_date=target_date.isoformat())
                    continue

            if report is None:
                skipped += 1
            else:
                success += 1

        result = BatchResult(success_count=success, error_count=errors, skipped_count=skipped)
        self._log.info(
            "rollover_batch_completed",
            target_date=target_date.isoformat(),
            success=result.success_count,
            errors=result.error_count,
            skipped=result.skipped_count,
        )
        return result

    def roll_user(self, user_id: str, target_date: date) -> UserRolloverReport | None:
        """Catch one user up to target_date.

        Returns None when the user is already at or past the target.
        """

        state = self._load_state(user_id)
        if state.last_rollover_date >= target_date:
            self._log.debug("rollover_user_caught_up", user_id=user_id, last=state.last_rollover_date.isoformat())
            return None

        start = max(state.last_rollover_date, target_date - timedelta(days=self._max_days_back))

        days_walked = 0
        failed_days: list[date] = []
        for current in islice(iter_days(start + ONE_DAY, target_date), self._max_days_to_process):
            outcome = self._processor.process(user_id, current - ONE_DAY, current)
            if outcome == DayOutcome.FAILED:
                failed_days.append(current)
            days_walked += 1

        advance_to = target_date
        if failed_days:
            self._log.warning(
                "rollover_user_days_failed",
                user_id=user_id,
                failed_days=[d.isoformat() for d in failed_days],
            )
            if self._hold_on_failed_day:
                advance_to = failed_days[0] - ONE_DAY

        self._save_state(user_id, advance_to, previous=state.last_rollover_date)
        return UserRolloverReport(
            user_id=user_id,
            days_walked=days_walked,
            failed_days=tuple(failed_days),
            advanced_to=advance_to,
        )

    def _load_state(self, user_id: str) -> RolloverState:
        try:
            return self._states.get_or_create(user_id)
        except StoreWriteError as exc:
            # Creation failed: continue this invocation from the sentinel.
            self._log.warning("rollover_state_create_failed", user_id=user_id, error=str(exc))
            return RolloverState.never_processed(user_id)

    def _save_state(self, user_id: str, advance_to: date, *, previous: date) -> None:
        if advance_to <= previous:
            return
        try:
            self._states.update(user_id, advance_to)
        except StoreError as exc:
            self._log.warning(
                "rollover_state_update_failed",
                user_id=user_id,
                last_rollover_date=advance_to.isoformat(),
                error=str(exc),
            )
