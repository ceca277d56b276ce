import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from hms.core.config import get_database_url

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine = None
_SessionLocal = None
_database_url = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str):
    """Create an engine tuned for the target backend.

    PostgreSQL gets a production connection pool. SQLite gets foreign-key
    enforcement and, for ``:memory:`` URLs, a single shared connection so
    DDL persists across sessions.
    """
    url = make_url(database_url)

    if url.drivername.startswith("postgres"):
        engine = create_engine(
            database_url,
            pool_size=20,
            max_overflow=40,
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args={
                "application_name": "hms_api",  # Visible in pg_stat_activity
                "connect_timeout": 10,
            },
            echo=False,
        )
    elif url.drivername.startswith("sqlite"):
        if ":memory:" in database_url or not url.database:
            engine = create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False},
            )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(database_url, echo=False)

    logger.debug(
        "SQLAlchemy engine created",
        extra={"context": {"dialect": engine.dialect.name}},
    )
    return engine


def get_engine():
    """Return a cached SQLAlchemy engine, creating it from DATABASE_URL on
    first call. This allows tests to set DATABASE_URL before the engine is
    constructed."""
    global _engine
    global _SessionLocal
    global _database_url
    database_url = get_database_url()
    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
        _engine = build_engine(database_url)
        _SessionLocal = None
        _database_url = database_url
    return _engine


def get_sessionmaker():
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
    return _SessionLocal


def SessionLocal():
    """Return a new Session bound to the configured engine."""
    return get_sessionmaker()()


def create_tables():
    """Create all tables in the configured database."""
    # Import models so Base.metadata is populated
    from hms.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    from hms.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
