"""
Centralized configuration module for application-wide settings.

All values come from environment variables. Each setting has a ``get_*``
helper (re-reads the environment, used by tests) and a module-level value
cached at import time. ``log_*_config`` helpers are called during startup
so the active configuration is visible in the logs.
"""

import logging
import os

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")

# ===========================
# Environment
# ===========================


def get_environment() -> str:
    """Return the deployment environment name (``FLASK_ENV``)."""
    return os.getenv("FLASK_ENV", "development")


def is_production() -> bool:
    return get_environment() == "production"


def is_testing() -> bool:
    """Return True when running under the test suite (``TESTING`` env var)."""
    return os.getenv("TESTING", "").lower().strip() in _TRUTHY


# ===========================
# Database Configuration
# ===========================

DEFAULT_DATABASE_URL = "sqlite:///./hms.db"


def get_database_url() -> str:
    """
    Get the database connection URL.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL, e.g. ``postgresql+psycopg2://...``
            Default: local SQLite file ``./hms.db``
    """
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


# ===========================
# Security Configuration
# ===========================

WEAK_SECRETS = ("dev-secret-change-me", "dev-jwt-secret-change-me", "secret123")


def get_flask_secret_key() -> str:
    return os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")


def get_jwt_settings() -> dict:
    """
    Get JWT issuing settings.

    Environment Variables:
        JWT_ISSUER: ``iss`` claim written to and required from tokens
        JWT_AUDIENCE: ``aud`` claim written to and required from tokens
        JWT_EXPIRATION_HOURS: token lifetime (default 24)
    """
    try:
        expiration_hours = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))
    except ValueError:
        logger.warning(
            "Invalid JWT_EXPIRATION_HOURS, falling back to 24",
            extra={"context": {"value": os.getenv("JWT_EXPIRATION_HOURS")}},
        )
        expiration_hours = 24

    return {
        "issuer": os.getenv("JWT_ISSUER", "hms-api"),
        "audience": os.getenv("JWT_AUDIENCE", "hms-clients"),
        "expiration_hours": expiration_hours,
    }


def validate_production_secrets() -> None:
    """Fail fast if a production deployment still uses development secrets.

    Raises:
        ValueError: If FLASK_SECRET_KEY or JWT_SECRET_KEY is weak or short.
    """
    if not is_production():
        return

    for env_var, value in (
        ("FLASK_SECRET_KEY", get_flask_secret_key()),
        ("JWT_SECRET_KEY", os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")),
    ):
        if value in WEAK_SECRETS or len(value) < 32:
            raise ValueError(
                f"Production deployment requires strong {env_var} (min 32 chars). "
                f"Set {env_var} environment variable."
            )


# ===========================
# Authorization Configuration
# ===========================


def get_default_user_role() -> str:
    """Role assigned to every newly registered user (``DEFAULT_USER_ROLE``)."""
    return os.getenv("DEFAULT_USER_ROLE", "User")


def get_admin_role() -> str:
    """Role that receives every seeded permission (``ADMIN_ROLE``)."""
    return os.getenv("ADMIN_ROLE", "Admin")


DEFAULT_USER_ROLE = get_default_user_role()
ADMIN_ROLE = get_admin_role()


def log_authorization_config():
    logger.info(
        "Authorization configuration initialized",
        extra={
            "context": {
                "default_user_role": DEFAULT_USER_ROLE,
                "admin_role": ADMIN_ROLE,
                "jwt_issuer": get_jwt_settings()["issuer"],
            }
        },
    )


# ===========================
# Rate Limiting Configuration
# ===========================


def get_rate_limit_enabled() -> bool:
    """
    Whether Flask-Limiter is active.

    Environment Variables:
        RATE_LIMIT_ENABLED: "0" disables rate limiting (tests)
            Default: "1"
    """
    return os.getenv("RATE_LIMIT_ENABLED", "1").strip() not in ("0", "false", "no")


def get_limiter_storage_uri() -> str:
    return os.getenv("LIMITER_STORAGE_URI", "memory://")


# ===========================
# Logging Configuration
# ===========================


def get_log_to_file() -> bool:
    """
    Whether logs are also written to rotating files under ``backend/logs``.

    Environment Variables:
        LOG_TO_FILE: "1" writes files, "0" logs to stdout only
            Default: "1"
    """
    return os.getenv("LOG_TO_FILE", "1").strip().lower() in _TRUTHY
