"""Engine and session factory for Libris."""

from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from libris.core.config import get_settings
from libris.core.logger import get_logger
from libris.db.base import Base

logger = get_logger(__name__)

settings = get_settings()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, applying SQLite specifics where needed."""
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases live only as long as their single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if database_url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def register_unicode_lower(dbapi_connection, connection_record):
            # SQLite's built-in lower() only folds ASCII letters
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    return engine


engine = create_db_engine(settings.database_url, settings.database_echo)
SessionLocal = sessionmaker(autoflush=False, bind=engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet."""
    # Register every model on the metadata
    import libris.db.models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database tables ready at %s", target.url.render_as_string(hide_password=True))
