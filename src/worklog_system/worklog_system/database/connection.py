from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector

from ..core.exceptions import ConfigurationError


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, db_config: Mapping[str, Any]) -> "DBConfig":
        """Build a config from the settings dict, rejecting incomplete credentials."""

        missing = [key for key in ("host", "user", "password", "database") if not db_config.get(key)]
        if missing:
            raise ConfigurationError(f"Missing database settings: {', '.join(missing)}")

        try:
            port = int(db_config.get("port", 3306))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid database port: {db_config.get('port')!r}") from exc

        return cls(
            host=str(db_config["host"]),
            port=port,
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation; the rollover batch is
    sequential so there is never more than one open at a time.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
