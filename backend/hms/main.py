import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_login import LoginManager

# Load environment variables conditionally
# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()

from hms.core import config  # noqa: E402
from hms.core.api_utils import register_error_handlers  # noqa: E402
from hms.core.auth_decorators import load_user_from_request  # noqa: E402
from hms.core.limiter_config import limiter  # noqa: E402
from hms.core.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


def _init_sentry(env: str) -> None:
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": env}},
        )
        return

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=env,
        release=os.getenv("GIT_SHA", "unknown"),
        integrations=[FlaskIntegration(), SqlalchemyIntegration()],
        traces_sample_rate=0.1,
        send_default_pii=False,  # Patient data must never leave the process
    )
    logger.info(
        "Sentry initialized",
        extra={"context": {"environment": env, "traces_sample_rate": 0.1}},
    )


def create_app(test_config=None):
    """Build the Flask application.

    ``test_config`` entries override the defaults (e.g. ``LOGIN_DISABLED``).
    """
    env = config.get_environment()
    is_production = config.is_production()
    if is_production:
        config.validate_production_secrets()

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.get_flask_secret_key(),
        TESTING=config.is_testing(),
    )
    if test_config:
        app.config.update(test_config)

    setup_logging(
        app=app,  # Pass app to register request/response hooks
        log_level=logging.INFO if is_production else logging.DEBUG,
        enable_sql_echo=not is_production and not app.config["TESTING"],
        log_to_file=config.get_log_to_file(),
        use_json_format=is_production,
    )
    logger.info(
        "Logging configured",
        extra={"context": {"environment": env, "json_format": is_production}},
    )
    config.log_authorization_config()

    _init_sentry(env)

    # Rate limiting; disabled entirely with RATE_LIMIT_ENABLED=0 (test suite)
    limiter.init_app(app)
    if not config.get_rate_limit_enabled():
        limiter.enabled = False
        logger.info("Rate limiting disabled")

    # Security headers in production; plain JSON API, so no CSP
    if is_production:
        from flask_talisman import Talisman

        Talisman(
            app,
            content_security_policy=None,
            force_https=True,
            strict_transport_security=True,
            strict_transport_security_max_age=63072000,
            frame_options="DENY",
            referrer_policy="no-referrer",
        )

    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.request_loader(load_user_from_request)

    register_error_handlers(app)

    from hms.controllers import ALL_BLUEPRINTS

    for blueprint in ALL_BLUEPRINTS:
        app.register_blueprint(blueprint)

    logger.info(
        "Application created",
        extra={
            "context": {
                "environment": env,
                "blueprints": [bp.name for bp in ALL_BLUEPRINTS],
            }
        },
    )
    return app
