"""
Health controller - liveness and database connectivity for monitoring.
"""

import logging

from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hms.core.api_utils import api_response
from hms.db.session import SessionLocal

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("", methods=["GET"], strict_slashes=False)
def health_check():
    """
    Report service status with a ``SELECT 1`` database check.

    Status codes:
        200: database reachable
        503: database check failed

    Note:
        - No authentication required (monitoring endpoint)
    """
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return api_response(True, "Service healthy", {"database": "ok"})
    except SQLAlchemyError as e:
        logger.error(
            "Health check database check failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Database unavailable", {"database": "error"}, 503)
    finally:
        db.close()
