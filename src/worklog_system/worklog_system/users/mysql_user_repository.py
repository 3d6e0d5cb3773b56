from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, username, full_name, is_active
                FROM users
                WHERE is_active=1
                ORDER BY user_id ASC
                """
            )
            rows = fetchall(cur)
            return [
                User(
                    user_id=str(r["user_id"]),
                    username=r["username"],
                    full_name=r.get("full_name"),
                    is_active=bool(r.get("is_active", True)),
                )
                for r in rows
            ]
