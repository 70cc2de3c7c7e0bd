from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.exceptions import (
    AlreadyPunchedInError,
    DomainError,
    EmployeeNotFoundError,
    NoOpenPunchInError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


def json_object() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(exc: Exception, *, fallback: str):
    """Map an exception to a JSON error with a message the user can act on."""
    if isinstance(exc, EmployeeNotFoundError):
        return jsonify({"success": False, "message": str(exc)}), 404
    if isinstance(exc, (AlreadyPunchedInError, NoOpenPunchInError)):
        return jsonify({"success": False, "message": str(exc)}), 409
    if isinstance(exc, DomainError):
        return jsonify({"success": False, "message": str(exc)}), 400
    if isinstance(exc, PersistenceError):
        return jsonify({"success": False, "message": fallback}), 500

    logger.exception(fallback)
    return jsonify({"success": False, "message": fallback}), 500
