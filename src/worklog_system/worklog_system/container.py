from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .common.datetime_utils import CivilClock
from .core.constants import DEFAULT_MAX_DAYS_BACK, DEFAULT_MAX_DAYS_TO_PROCESS, DEFAULT_ROLLOVER_HOUR
from .database.connection import DBConfig, DatabaseConnection
from .rollover.gate import InvocationGate, RolloverTrigger
from .rollover.mysql_rollover_repository import MySQLRolloverRunRepository, MySQLRolloverStateRepository
from .rollover.processor import DayRolloverProcessor
from .rollover.run_logger import RunLogger
from .rollover.service import BatchRolloverService
from .users.mysql_user_repository import MySQLUserRepository
from .work_entries.mysql_work_entry_repository import MySQLWorkEntryRepository


@dataclass(frozen=True)
class RolloverSettings:
    rollover_hour: int = DEFAULT_ROLLOVER_HOUR
    max_days_back: int = DEFAULT_MAX_DAYS_BACK
    max_days_to_process: int = DEFAULT_MAX_DAYS_TO_PROCESS
    hold_on_failed_day: bool = False

    @classmethod
    def from_settings(cls, settings: Any) -> "RolloverSettings":
        return cls(
            rollover_hour=int(getattr(settings, "ROLLOVER_HOUR", DEFAULT_ROLLOVER_HOUR)),
            max_days_back=int(getattr(settings, "ROLLOVER_MAX_DAYS_BACK", DEFAULT_MAX_DAYS_BACK)),
            max_days_to_process=int(getattr(settings, "ROLLOVER_MAX_DAYS_TO_PROCESS", DEFAULT_MAX_DAYS_TO_PROCESS)),
            hold_on_failed_day=bool(getattr(settings, "ROLLOVER_HOLD_ON_FAILED_DAY", False)),
        )


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: CivilClock

    users_repo: MySQLUserRepository
    work_entries_repo: MySQLWorkEntryRepository
    rollover_state_repo: MySQLRolloverStateRepository
    rollover_runs_repo: MySQLRolloverRunRepository

    day_processor: DayRolloverProcessor
    batch_service: BatchRolloverService
    run_logger: RunLogger
    gate: InvocationGate
    trigger: RolloverTrigger


def build_container(*, db_config: Mapping[str, Any], rollover: RolloverSettings | None = None) -> Container:
    """Wire repositories and services.

    Raises ConfigurationError when the store credentials are missing or invalid.
    """

    rollover = rollover or RolloverSettings()
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    clock = CivilClock()

    users_repo = MySQLUserRepository(conn)
    work_entries_repo = MySQLWorkEntryRepository(conn)
    rollover_state_repo = MySQLRolloverStateRepository(conn)
    rollover_runs_repo = MySQLRolloverRunRepository(conn)

    day_processor = DayRolloverProcessor(work_entries_repo, clock=clock)
    batch_service = BatchRolloverService(
        users_repo,
        rollover_state_repo,
        day_processor,
        max_days_back=rollover.max_days_back,
        max_days_to_process=rollover.max_days_to_process,
        hold_on_failed_day=rollover.hold_on_failed_day,
    )
    run_logger = RunLogger(rollover_runs_repo)
    gate = InvocationGate(clock, rollover_hour=rollover.rollover_hour)
    trigger = RolloverTrigger(gate, batch_service, run_logger)

    return Container(
        conn=conn,
        clock=clock,
        users_repo=users_repo,
        work_entries_repo=work_entries_repo,
        rollover_state_repo=rollover_state_repo,
        rollover_runs_repo=rollover_runs_repo,
        day_processor=day_processor,
        batch_service=batch_service,
        run_logger=run_logger,
        gate=gate,
        trigger=trigger,
    )
