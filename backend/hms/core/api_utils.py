"""
Common API utilities for consistent response formatting across all controllers.

Every endpoint answers with the same envelope::

    {"data": ..., "message": "...", "status": 200, "success": true}
"""

import logging
from typing import Any, Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from hms.core.exceptions import HMSError

logger = logging.getLogger(__name__)


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code, echoed in the body as ``status``

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {
        "data": data,
        "message": message,
        "status": status_code,
        "success": success,
    }
    return jsonify(response), status_code


def register_error_handlers(app: Flask) -> None:
    """Translate exceptions raised by services into the JSON envelope."""

    @app.errorhandler(HMSError)
    def handle_domain_error(error: HMSError):
        log = logger.error if error.status_code >= 500 else logger.warning
        log(
            error.message,
            extra={
                "context": {
                    "error_type": type(error).__name__,
                    "status_code": error.status_code,
                }
            },
        )
        return api_response(False, error.message, None, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return api_response(
            False, error.description or error.name, None, error.code or 500
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.error(
            "Unhandled exception while processing request",
            extra={"context": {"error": str(error), "error_type": type(error).__name__}},
            exc_info=True,
        )
        return api_response(False, "Internal server error", None, 500)
