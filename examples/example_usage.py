"""Example: drive the rollover through the service layer (no Flask).

Controllers are a thin layer; the business logic lives in services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.worklog_system.worklog_system.container import RolloverSettings, build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, rollover=RolloverSettings.from_settings(settings))

    today = container.clock.today()
    result = container.batch_service.run_for_target(today)
    print(f"{today}: {result.to_dict()} (already caught up: {result.skipped_count})")
    print(container.trigger.status())


if __name__ == "__main__":
    main()
