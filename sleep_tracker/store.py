"""
Sleep store: async access to the daily_sleep_quality_table.

Every database call runs on one worker thread, so writes are serialised and
the event loop never blocks on SQLite. Mutations refresh the live list of
nights once they complete, back on the caller's event loop.
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

from sqlalchemy.engine import Engine
from sqlmodel import delete, select

from sleep_tracker.db import open_session
from sleep_tracker.models import SleepNight
from sleep_tracker.observable import LiveValue

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SleepNightNotFoundError(LookupError):
    def __init__(self, night_id: Optional[int]):
        super().__init__(f"Sleep night {night_id} not found")
        self.night_id = night_id


class SleepStore:
    def __init__(self, engine: Engine):
        self._engine = engine
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sleep-store")
        self._nights: LiveValue[list[SleepNight]] = LiveValue([], name="nights")
        self._loaded = False

    @property
    def nights(self) -> LiveValue[list[SleepNight]]:
        """Live list of all nights, newest first. Filled by get_all()."""
        return self._nights

    async def _run(self, fn: Callable[..., T], *args) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, fn, *args)

    async def _refresh(self) -> None:
        nights = await self._run(self._select_all)
        self._loaded = True
        self._nights.set(nights)

    # --- worker-thread bodies ---

    def _insert(self, night: SleepNight) -> SleepNight:
        row = SleepNight(
            id=night.id,
            start_time=night.start_time,
            end_time=night.end_time,
            quality_rating=night.quality_rating,
        )
        with open_session(self._engine) as session:
            session.add(row)
            session.commit()
            session.refresh(row)
        return row

    def _update(self, night: SleepNight) -> SleepNight:
        with open_session(self._engine) as session:
            row = session.get(SleepNight, night.id) if night.id is not None else None
            if row is None:
                raise SleepNightNotFoundError(night.id)
            row.start_time = night.start_time
            row.end_time = night.end_time
            row.quality_rating = night.quality_rating
            session.add(row)
            session.commit()
            session.refresh(row)
        return row

    def _select_one(self, night_id: int) -> Optional[SleepNight]:
        with open_session(self._engine) as session:
            return session.get(SleepNight, night_id)

    def _select_tonight(self) -> Optional[SleepNight]:
        statement = select(SleepNight).order_by(SleepNight.id.desc()).limit(1)
        with open_session(self._engine) as session:
            return session.exec(statement).first()

    def _select_all(self) -> list[SleepNight]:
        statement = select(SleepNight).order_by(SleepNight.id.desc())
        with open_session(self._engine) as session:
            return list(session.exec(statement).all())

    def _delete_all(self) -> int:
        with open_session(self._engine) as session:
            result = session.exec(delete(SleepNight))
            session.commit()
            return result.rowcount

    # --- public API ---

    async def insert(self, night: SleepNight) -> SleepNight:
        stored = await self._run(self._insert, night)
        logger.debug("Inserted sleep night %s", stored.id)
        await self._refresh()
        return stored

    async def update(self, night: SleepNight) -> SleepNight:
        """Overwrite the stored night with the same id. Raises SleepNightNotFoundError if absent."""
        stored = await self._run(self._update, night)
        logger.debug("Updated sleep night %s", stored.id)
        await self._refresh()
        return stored

    async def get(self, night_id: int) -> Optional[SleepNight]:
        return await self._run(self._select_one, night_id)

    async def get_tonight(self) -> Optional[SleepNight]:
        """Most recent night (highest id), or None when the table is empty."""
        return await self._run(self._select_tonight)

    async def get_all(self) -> LiveValue[list[SleepNight]]:
        if not self._loaded:
            await self._refresh()
        return self._nights

    async def clear(self) -> None:
        removed = await self._run(self._delete_all)
        logger.debug("Cleared %s sleep nights", removed)
        await self._refresh()

    def close(self) -> None:
        self._executor.shutdown(wait=True)
