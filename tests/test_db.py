"""Tests for schema setup and wipe-on-version-change."""

import pytest
from sqlalchemy import inspect, text

from sleep_tracker.db import SCHEMA_VERSION, init_db, make_engine
from sleep_tracker.models import SleepNight
from sleep_tracker.store import SleepStore


def _version(engine) -> int:
    with engine.connect() as conn:
        return conn.execute(text("PRAGMA user_version")).scalar()


def test_init_db_creates_table_and_records_version(engine):
    assert inspect(engine).has_table("daily_sleep_quality_table")
    assert _version(engine) == SCHEMA_VERSION


@pytest.mark.asyncio
async def test_same_version_keeps_data(engine):
    store = SleepStore(engine)
    try:
        await store.insert(SleepNight.begin(100))
        init_db(engine)
        assert (await store.get_tonight()).start_time == 100
    finally:
        store.close()


@pytest.mark.asyncio
async def test_version_change_wipes_data(engine):
    store = SleepStore(engine)
    try:
        await store.insert(SleepNight.begin(100))
        init_db(engine, version=SCHEMA_VERSION + 1)
        assert await store.get_tonight() is None
        assert _version(engine) == SCHEMA_VERSION + 1
    finally:
        store.close()


def test_file_database(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'sleep.db'}")
    try:
        init_db(engine)
        assert inspect(engine).has_table(SleepNight.__tablename__)
    finally:
        engine.dispose()
