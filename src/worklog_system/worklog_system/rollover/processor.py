from __future__ import annotations

from datetime import date

from structlog.stdlib import BoundLogger

from ..common.datetime_utils import CivilClock
from ..common.logging import get_logger
from ..core.enums import DayOutcome
from ..core.exceptions import StoreError
from ..work_entries.repository import WorkEntryRepository


class DayRolloverProcessor:
    """Carries one day's unfinished tasks into the next day's work entry.

    The merge is a set union on task ids, so applying the same day twice leaves
    the destination unchanged.
    """

    def __init__(
        self,
        work_entries: WorkEntryRepository,
        *,
        clock: CivilClock | None = None,
        logger: BoundLogger | None = None,
    ):
        self._entries = work_entries
        self._clock = clock or CivilClock()
        self._log = logger or get_logger(__name__)

    def process(self, user_id: str, from_date: date, to_date: date) -> DayOutcome:
        if from_date >= to_date:
            return DayOutcome.SKIPPED

        try:
            return self._carry(user_id, from_date, to_date)
        except StoreError as exc:
            self._log.error(
                "rollover_day_failed",
                user_id=user_id,
                from_date=from_date.isoformat(),
                to_date=to_date.isoformat(),
                error=str(exc),
            )
            return DayOutcome.FAILED

    def _carry(self, user_id: str, from_date: date, to_date: date) -> DayOutcome:
        from_entry = self._entries.get_for_user_and_date(user_id, from_date)
        if from_entry is None:
            self._log.debug("rollover_day_no_source", user_id=user_id, from_date=from_date.isoformat())
            return DayOutcome.NOTHING_TO_CARRY

        unfinished = from_entry.unfinished_tasks()
        if not unfinished:
            return DayOutcome.NOTHING_TO_CARRY

        to_entry = self._entries.get_for_user_and_date(user_id, to_date)
        if to_entry is None:
            to_entry = self._entries.create(user_id=user_id, work_date=to_date)

        current = to_entry.assigned_tasks
        merged = tuple(dict.fromkeys(current + unfinished))

        if len(merged) <= len(current):
            self._log.debug(
                "rollover_day_unchanged",
                user_id=user_id,
                to_date=to_date.isoformat(),
                unfinished=len(unfinished),
            )
            return DayOutcome.UNCHANGED

        self._entries.update_assigned_tasks(
            entry_id=to_entry.entry_id,
            assigned_tasks=merged,
            updated_at=self._clock.now(),
        )
        self._log.info(
            "rollover_day_merged",
            user_id=user_id,
            from_date=from_date.isoformat(),
            to_date=to_date.isoformat(),
            carried=len(merged) - len(current),
            assigned=len(merged),
        )
        return DayOutcome.MERGED
