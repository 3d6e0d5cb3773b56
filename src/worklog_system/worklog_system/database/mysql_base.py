from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..core.exceptions import StoreError, StoreReadError, StoreWriteError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection,
    *,
    dictionary: bool = True,
    error_cls: type[StoreError] = StoreReadError,
):
    """Open a short-lived connection and cursor, committing on success.

    Driver errors surface as ``error_cls`` so callers only deal with the store
    error taxonomy.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise error_cls(f"Cannot connect to database: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _quietly(conn.rollback)
        raise error_cls(str(exc)) from exc
    except Exception:
        _quietly(conn.rollback)
        raise
    finally:
        _quietly(conn.close)


def _quietly(action) -> None:
    # A dropped connection also fails rollback/close; the first error wins.
    try:
        action()
    except mysql.connector.Error:
        pass


def write_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    return db_cursor(conn_factory, dictionary=dictionary, error_cls=StoreWriteError)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def decode_task_ids(value: Any) -> tuple[str, ...]:
    """Decode a JSON array column into a tuple of unique task ids (order kept)."""

    if value is None or value == "":
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Unsupported task id column value: {type(value)!r}")
    return tuple(dict.fromkeys(str(v) for v in value))


def encode_task_ids(task_ids: Sequence[str]) -> str:
    return json.dumps(list(task_ids))
