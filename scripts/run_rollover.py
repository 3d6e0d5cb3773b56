"""Run the work-entry rollover from cron or by hand.

Without flags the run is gated to the civil rollover hour, like the HTTP
trigger. ``--force`` skips the gate; ``--date`` rolls up to an explicit date.
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.worklog_system.worklog_system.common.datetime_utils import parse_iso_date
from src.worklog_system.worklog_system.common.logging import configure_logging
from src.worklog_system.worklog_system.container import RolloverSettings, build_container
from src.worklog_system.worklog_system.core.exceptions import ConfigurationError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Carry unfinished tasks forward onto the current day.")
    parser.add_argument("--force", action="store_true", help="run even outside the rollover hour")
    parser.add_argument("--date", type=parse_iso_date, default=None, help="target date (YYYY-MM-DD); implies --force")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_output=bool(getattr(settings, "LOG_JSON", True)))

    try:
        container = build_container(db_config=settings.DB_CONFIG, rollover=RolloverSettings.from_settings(settings))
    except ConfigurationError as e:
        print(json.dumps({"error": "Configuration error", "message": str(e)}))
        return 1

    payload = container.trigger.invoke(force=args.force or args.date is not None, target_date=args.date)
    print(json.dumps(payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
