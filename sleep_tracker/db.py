import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from sleep_tracker.models import SleepNight

logger = logging.getLogger(__name__)

# Bump when SleepNight changes shape; existing data is wiped on mismatch.
SCHEMA_VERSION = 2


def make_engine(database_url: str, echo: bool = False) -> Engine:
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        # The store's worker thread is not the thread that created the engine.
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def _stored_version(engine: Engine) -> int:
    with engine.connect() as conn:
        return conn.execute(text("PRAGMA user_version")).scalar() or 0


def _set_version(engine: Engine, version: int) -> None:
    with engine.begin() as conn:
        conn.execute(text(f"PRAGMA user_version = {int(version)}"))


def init_db(engine: Engine, version: int = SCHEMA_VERSION) -> None:
    """Create the sleep table, wiping it first if the stored schema version differs."""
    if engine.dialect.name != "sqlite":
        SQLModel.metadata.create_all(engine)
        return

    has_table = inspect(engine).has_table(SleepNight.__tablename__)
    stored = _stored_version(engine)
    if has_table and stored != version:
        logger.warning(
            "Schema version changed (%s -> %s), dropping sleep history", stored, version
        )
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    if stored != version:
        _set_version(engine, version)


def open_session(engine: Engine) -> Session:
    # Rows stay readable after commit; the store hands them to the event loop.
    return Session(engine, expire_on_commit=False)
