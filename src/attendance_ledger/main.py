from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from .attendance.controller import register as register_attendance
from .common.http import json_endpoint
from .common.validators import optional_int
from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .roles.controller import register as register_roles
from .transfers.controller import register as register_transfers

_log = logging.getLogger("attendance_ledger.web")


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CALLER_HEADER"] = getattr(settings, "CALLER_HEADER", "X-Caller-Identity")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = getattr(settings, "STORAGE_BACKEND", "memory")
    db_config = getattr(settings, "DB_CONFIG", None)
    _log.info("settings=%s storage=%s variant=%s", settings_module, backend, getattr(settings, "LEDGER_VARIANT", None))

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        _log.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        storage_backend=backend,
        db_config=db_config,
        variant=getattr(settings, "LEDGER_VARIANT", "admin_timeslot"),
        event_log_size=int(getattr(settings, "EVENT_LOG_SIZE", 500)),
    )

    owner = (getattr(settings, "REGISTRY_OWNER", "") or "").strip()
    initial_admin = (getattr(settings, "REGISTRY_INITIAL_ADMIN", "") or "").strip() or None
    if owner:
        container.role_service.initialize(owner, initial_admin)
    else:
        _log.warning("REGISTRY_OWNER is not set; registration is disabled until the registry is initialized")

    app.extensions["attendance_ledger"] = container

    register_roles(app, container)
    register_attendance(app, container)
    register_transfers(app, container)

    @app.route("/events", methods=["GET"], endpoint="recent_events")
    @json_endpoint
    def recent_events():
        limit = optional_int(request.args.get("limit"), "limit")
        return jsonify({"events": [e.to_dict() for e in container.event_log.recent(limit)]})

    return app
