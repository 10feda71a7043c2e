"""Shared helpers for the JSON controllers."""
from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, g, jsonify, request

from ..core.constants import DEFAULT_CALLER_HEADER
from ..core.exceptions import (
    AlreadyRegistered,
    AttendanceAlreadyRecorded,
    AuthorizationError,
    ConfigurationError,
    DomainError,
    DuplicateAttendance,
    OperationNotSupported,
    RegistryNotInitialized,
)

_log = logging.getLogger("attendance_ledger.web")


def status_for(error: DomainError) -> int:
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, (AlreadyRegistered, AttendanceAlreadyRecorded, DuplicateAttendance)):
        return 409
    if isinstance(error, OperationNotSupported):
        return 405
    if isinstance(error, RegistryNotInitialized):
        return 503
    if isinstance(error, ConfigurationError):
        return 500
    return 400


def error_response(error: DomainError):
    return jsonify({"success": False, "error": error.code, "message": str(error)}), status_for(error)


def json_endpoint(view):
    """Turn domain errors into JSON error responses; anything else is a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            _log.exception("unhandled error in %s", request.endpoint)
            return jsonify({"success": False, "error": "InternalError", "message": "Internal error"}), 500

    return wrapper


def caller_required(view):
    """Require the authenticated caller identity forwarded by the gateway header."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        header = current_app.config.get("CALLER_HEADER", DEFAULT_CALLER_HEADER)
        caller = (request.headers.get(header) or "").strip()
        if not caller:
            return jsonify({"success": False, "error": "Unauthenticated", "message": f"Missing {header} header"}), 401
        g.caller = caller
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
