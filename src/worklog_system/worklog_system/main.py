from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging import configure_logging, get_logger
from .container import Container, RolloverSettings, build_container
from .database.bootstrap import apply_schema, list_tables
from .rollover.controller import register as register_rollover


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_output=bool(getattr(settings, "LOG_JSON", True)))
    log = get_logger(__name__)

    db_config = dict(getattr(settings, "DB_CONFIG"))
    rollover = RolloverSettings.from_settings(settings)

    log.info(
        "app_settings_loaded",
        settings=settings_module,
        db=f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        log.info("schema_ready", tables=len(list_tables(db_config)))

    # Built lazily so a missing credential surfaces as a 500 on the endpoint.
    cached: dict[str, Optional[Container]] = {"container": None}

    def get_trigger():
        if cached["container"] is None:
            cached["container"] = build_container(db_config=db_config, rollover=rollover)
        return cached["container"].trigger

    register_rollover(app, get_trigger, trigger_token=getattr(settings, "ROLLOVER_TRIGGER_TOKEN", None) or None)

    return app
