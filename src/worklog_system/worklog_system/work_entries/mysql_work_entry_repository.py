from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import StoreWriteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    decode_task_ids,
    encode_task_ids,
    fetchone,
    normalize_mysql_time,
    write_cursor,
)
from .model import WorkEntry
from .repository import WorkEntryRepository

_COLUMNS = """
    entry_id, user_id, work_date, assigned_tasks, completed_tasks,
    check_in_time, check_out_time, is_absent, updated_at
"""


def _to_entry(r: Dict[str, Any]) -> WorkEntry:
    return WorkEntry(
        entry_id=int(r["entry_id"]),
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        assigned_tasks=decode_task_ids(r.get("assigned_tasks")),
        completed_tasks=decode_task_ids(r.get("completed_tasks")),
        check_in_time=normalize_mysql_time(r.get("check_in_time")),
        check_out_time=normalize_mysql_time(r.get("check_out_time")),
        is_absent=bool(r.get("is_absent", False)),
        updated_at=r.get("updated_at"),
    )


def _naive(value: datetime) -> datetime:
    # DATETIME columns hold civil wall time without an offset.
    return value.replace(tzinfo=None) if value.tzinfo else value


class MySQLWorkEntryRepository(WorkEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[WorkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_entries
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def create(self, *, user_id: str, work_date: date) -> WorkEntry:
        with write_cursor(self._conn_factory) as (_, cur):
            # INSERT IGNORE keeps creation idempotent under the (user_id, work_date) key.
            cur.execute(
                """
                INSERT IGNORE INTO work_entries(
                    user_id, work_date, assigned_tasks, completed_tasks,
                    check_in_time, check_out_time, is_absent
                )
                VALUES(%s,%s,%s,%s,NULL,NULL,0)
                """,
                (user_id, work_date, encode_task_ids(()), encode_task_ids(())),
            )
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_entries
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            if not r:
                raise StoreWriteError(f"Work entry for {user_id} on {work_date} was not created")
            return _to_entry(r)

    def update_assigned_tasks(
        self,
        *,
        entry_id: int,
        assigned_tasks: Sequence[str],
        updated_at: datetime,
    ) -> WorkEntry:
        with write_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_entries
                SET assigned_tasks=%s, updated_at=%s
                WHERE entry_id=%s
                """,
                (encode_task_ids(assigned_tasks), _naive(updated_at), int(entry_id)),
            )
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_entries
                WHERE entry_id=%s
                """,
                (int(entry_id),),
            )
            r = fetchone(cur)
            if not r:
                raise StoreWriteError(f"Work entry {entry_id} not found")
            return _to_entry(r)
