"""
Logging setup for the back office API.

Records carry structured fields under ``extra={"context": {...}}``. Production
writes one JSON object per line; development gets coloured console lines with
the context appended. With file logging on, everything goes to ``logs/app.log``
and ERROR and above also to ``logs/hms_errors.log``.

Each request gets an id that is stamped on every JSON record emitted while the
request is handled and echoed back in the ``X-Request-ID`` response header.
Request bodies are never logged; they carry patient data.
"""

import json
import logging
import logging.handlers
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flask import Flask, g, has_request_context, request
from flask_login import current_user
from sqlalchemy import event
from sqlalchemy.engine import Engine

REQUEST_ID_HEADER = "X-Request-ID"

# Queries slower than this are logged at WARNING instead of DEBUG
SLOW_QUERY_MS = 500

_LOG_DIR = Path(__file__).resolve().parents[2] / "logs"
_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5

_SQL_TIMING_REGISTERED = False


def _current_request_id() -> Optional[str]:
    if has_request_context():
        return g.get("request_id")
    return None


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the active request id."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        request_id = _current_request_id()
        if request_id:
            log_data["request_id"] = request_id

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self.LEVEL_COLORS.get(levelname, self.RESET)
        record.levelname = f"{color}{levelname:8}{self.RESET}"
        try:
            line = super().format(record)
        finally:
            record.levelname = levelname

        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} [{pairs}]"
        return line


def _register_sql_timing() -> None:
    global _SQL_TIMING_REGISTERED
    if _SQL_TIMING_REGISTERED:
        return

    sql_logger = logging.getLogger("hms.sql")

    @event.listens_for(Engine, "before_cursor_execute")
    def _start_timer(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(Engine, "after_cursor_execute")
    def _log_duration(conn, cursor, statement, parameters, context, executemany):
        starts = conn.info.get("query_start_time")
        if not starts:
            return
        duration_ms = round((time.perf_counter() - starts.pop()) * 1000, 2)
        level = logging.WARNING if duration_ms >= SLOW_QUERY_MS else logging.DEBUG
        sql_logger.log(
            level,
            "Query took %sms",
            duration_ms,
            extra={"context": {"statement": statement[:300], "duration_ms": duration_ms}},
        )

    _SQL_TIMING_REGISTERED = True


def _file_handlers(level: int) -> list:
    """Rotating JSON handlers for the full log and the error-only log."""
    _LOG_DIR.mkdir(exist_ok=True)
    handlers = []
    for filename, handler_level in (("app.log", level), ("hms_errors.log", logging.ERROR)):
        handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / filename,
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_LOG_BACKUPS,
            encoding="utf-8",
        )
        handler.setLevel(handler_level)
        handler.setFormatter(JSONFormatter())
        handlers.append(handler)
    return handlers


def _register_request_hooks(app: Flask) -> None:
    request_logger = logging.getLogger("hms.request")

    @app.before_request
    def _start_request():
        g.request_started = time.perf_counter()
        g.request_id = (request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex)[:64]

    @app.after_request
    def _finish_request(response):
        started = g.get("request_started")
        if started is None:
            return response

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        user_id = None
        if current_user and current_user.is_authenticated:
            user_id = getattr(current_user, "id", None)

        # 5xx responses are logged by the error handlers with a traceback
        level = logging.WARNING if 400 <= response.status_code < 500 else logging.INFO
        request_logger.log(
            level,
            "%s %s -> %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "context": {
                    "method": request.method,
                    "path": request.path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                    "user_id": user_id,
                    "remote_addr": request.remote_addr,
                }
            },
        )
        response.headers[REQUEST_ID_HEADER] = g.request_id
        return response


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = True,
    use_json_format: bool = False,
) -> None:
    """
    Configure the root logger and, when ``app`` is given, per-request logging.

    Args:
        app: Flask application to attach request id and access-log hooks to
        log_level: ``logging.INFO`` or a level name such as ``"DEBUG"``
        enable_sql_echo: time every SQL statement through engine events
        log_to_file: add the rotating ``app.log`` and ``hms_errors.log`` files
        use_json_format: JSON console output instead of coloured lines
    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # create_app may run more than once per process (tests)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if use_json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ConsoleFormatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    root_logger.addHandler(console_handler)

    if log_to_file:
        try:
            for handler in _file_handlers(level):
                root_logger.addHandler(handler)
        except OSError as exc:
            root_logger.warning(
                "File logging unavailable, console only: %s",
                exc,
                extra={"context": {"log_dir": str(_LOG_DIR)}},
            )

    if enable_sql_echo:
        logging.getLogger("hms.sql").setLevel(logging.DEBUG)
        _register_sql_timing()

    if app is not None:
        _register_request_hooks(app)

    # Werkzeug repeats every request line that the access log already has
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
