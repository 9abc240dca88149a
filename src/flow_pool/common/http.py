from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.exceptions import (
    CapacityError,
    DomainError,
    NotFoundError,
    ReassignmentInterruptedError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (CapacityError, 409),
    (ReassignmentInterruptedError, 409),
    (StoreUnavailableError, 503),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def error_payload(exc: DomainError) -> dict:
    return {"success": False, "error": exc.kind, "message": str(exc)}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = status_for(exc)
        if status >= 500:
            logger.error("request failed: %s", exc)
        return jsonify(error_payload(exc)), status
