from __future__ import annotations

import hmac
from functools import wraps
from typing import Callable, Optional

from flask import Flask, jsonify, request

from ..common.logging import get_logger
from ..core.exceptions import ConfigurationError
from .gate import RolloverTrigger


def register(app: Flask, get_trigger: Callable[[], RolloverTrigger], *, trigger_token: Optional[str] = None) -> None:
    """Register the rollover JSON endpoints.

    ``get_trigger`` builds (or returns the cached) trigger; it raises
    ConfigurationError when store credentials are missing, which is answered with
    a 500 before any batch logic runs.
    """

    log = get_logger(__name__)

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if trigger_token:
                header = request.headers.get("Authorization", "")
                supplied = header[len("Bearer "):] if header.startswith("Bearer ") else ""
                if not hmac.compare_digest(supplied, trigger_token):
                    return jsonify({"error": "Unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    def config_guarded(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                trigger = get_trigger()
            except ConfigurationError as e:
                log.error("rollover_configuration_error", error=str(e))
                return jsonify({"error": "Internal server error", "message": str(e)}), 500
            return view(trigger, *args, **kwargs)

        return wrapper

    @app.route("/api/rollover/scheduled", methods=["POST"], endpoint="rollover_scheduled")
    @token_required
    @config_guarded
    def rollover_scheduled(trigger: RolloverTrigger):
        return jsonify(trigger.invoke()), 200

    @app.route("/api/rollover/manual", methods=["POST"], endpoint="rollover_manual")
    @token_required
    @config_guarded
    def rollover_manual(trigger: RolloverTrigger):
        return jsonify(trigger.invoke(force=True)), 200

    @app.route("/api/rollover/status", methods=["GET"], endpoint="rollover_status")
    @config_guarded
    def rollover_status(trigger: RolloverTrigger):
        return jsonify(trigger.status()), 200
