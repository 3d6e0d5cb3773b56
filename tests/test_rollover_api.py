from __future__ import annotations

import sys

import pytest
from flask import Flask

from src.worklog_system.worklog_system import main as main_module
from src.worklog_system.worklog_system.core.exceptions import ConfigurationError
from src.worklog_system.worklog_system.rollover import controller
from src.worklog_system.worklog_system.rollover.controller import register


class FakeTrigger:
    def __init__(self):
        self.calls: list[bool] = []

    def invoke(self, *, force: bool = False, target_date=None):
        self.calls.append(force)
        return {
            "message": "Rollover completed",
            "currentTime": "2025-06-02T00:15:00+05:30",
            "result": {"success": 3, "errors": 1},
            "shouldRun": True,
        }

    def status(self):
        return {"status": "partial_success"}


def make_client(trigger=None, *, token=None, config_error=None):
    app = Flask(__name__)
    trigger = trigger or FakeTrigger()

    def get_trigger():
        if config_error:
            raise ConfigurationError(config_error)
        return trigger

    register(app, get_trigger, trigger_token=token)
    return app.test_client()


def test_scheduled_returns_200_even_with_partial_errors():
    trigger = FakeTrigger()
    resp = make_client(trigger).post("/api/rollover/scheduled")

    assert resp.status_code == 200
    assert resp.get_json()["result"] == {"success": 3, "errors": 1}
    assert trigger.calls == [False]


def test_manual_forces_the_run():
    trigger = FakeTrigger()
    resp = make_client(trigger).post("/api/rollover/manual")

    assert resp.status_code == 200
    assert trigger.calls == [True]


def test_status_endpoint():
    resp = make_client().get("/api/rollover/status")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "partial_success"}


def test_configuration_error_returns_500_before_running():
    resp = make_client(config_error="Missing database settings: password").post("/api/rollover/scheduled")

    assert resp.status_code == 500
    assert resp.get_json() == {
        "error": "Internal server error",
        "message": "Missing database settings: password",
    }


def test_configuration_error_uses_logger_resolved_at_registration(monkeypatch):
    events: list[str] = []

    class RecordingLogger:
        def error(self, event, **kwargs):
            events.append(event)

    monkeypatch.setattr(controller, "get_logger", lambda name: RecordingLogger())

    resp = make_client(config_error="Missing database settings: host").post("/api/rollover/manual")

    assert resp.status_code == 500
    assert events == ["rollover_configuration_error"]


def test_token_is_required_when_configured():
    trigger = FakeTrigger()
    client = make_client(trigger, token="s3cret")

    assert client.post("/api/rollover/scheduled").status_code == 401
    assert client.post("/api/rollover/scheduled", headers={"Authorization": "Bearer nope"}).status_code == 401
    assert trigger.calls == []

    ok = client.post("/api/rollover/scheduled", headers={"Authorization": "Bearer s3cret"})
    assert ok.status_code == 200


def test_create_app_reports_missing_credentials(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    for key in ("DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME", "ROLLOVER_TRIGGER_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delitem(sys.modules, "config.production", raising=False)
    monkeypatch.setattr(main_module, "load_dotenv", lambda **kwargs: None)
    monkeypatch.setattr(main_module, "configure_logging", lambda *args, **kwargs: None)

    app = main_module.create_app()
    resp = app.test_client().post("/api/rollover/scheduled")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "Internal server error"


@pytest.mark.parametrize(
    "env,expected",
    [("production", "config.production"), ("test", "config.testing"), ("", "config.development")],
)
def test_settings_module_selection(monkeypatch, env, expected):
    from config import get_settings_module

    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected
