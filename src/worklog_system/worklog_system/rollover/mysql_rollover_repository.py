from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from ..core.constants import CIVIL_UTC_OFFSET, EPOCH_SENTINEL
from ..core.enums import RunStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, write_cursor
from .model import RolloverRun, RolloverState
from .repository import RolloverRunRepository, RolloverStateRepository

CIVIL_TZ = timezone(CIVIL_UTC_OFFSET)


def _civil(value: datetime) -> datetime:
    # execution_time is stored as naive civil wall time.
    return value.replace(tzinfo=CIVIL_TZ) if value.tzinfo is None else value


class MySQLRolloverStateRepository(RolloverStateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_or_create(self, user_id: str) -> RolloverState:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, last_rollover_date FROM rollover_state WHERE user_id=%s",
                (user_id,),
            )
            r = fetchone(cur)
        if r:
            return RolloverState(user_id=str(r["user_id"]), last_rollover_date=r["last_rollover_date"])

        with write_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO rollover_state(user_id, last_rollover_date) VALUES(%s,%s)",
                (user_id, EPOCH_SENTINEL),
            )
        return RolloverState.never_processed(user_id)

    def update(self, user_id: str, last_rollover_date: date) -> None:
        with write_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE rollover_state SET last_rollover_date=%s WHERE user_id=%s",
                (last_rollover_date, user_id),
            )


class MySQLRolloverRunRepository(RolloverRunRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, run: RolloverRun) -> None:
        execution_time = run.execution_time
        if execution_time.tzinfo:
            execution_time = execution_time.replace(tzinfo=None)

        with write_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO rollover_runs(execution_date, execution_time, users_processed, errors_count, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    run.execution_date,
                    execution_time,
                    int(run.users_processed),
                    int(run.errors_count),
                    run.status.value,
                ),
            )

    def latest(self) -> Optional[RolloverRun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT execution_date, execution_time, users_processed, errors_count, status
                FROM rollover_runs
                ORDER BY execution_time DESC, run_id DESC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return RolloverRun(
                execution_date=r["execution_date"],
                execution_time=_civil(r["execution_time"]),
                users_processed=int(r["users_processed"]),
                errors_count=int(r["errors_count"]),
                status=RunStatus(r["status"]),
            )
