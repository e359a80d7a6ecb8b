"""
Sleep tracker coordinator: the observable state behind the tracker screen.

Actions are coroutines meant to run on one event loop. Each one suspends only
while the store works on its own thread, then updates state back on the loop.
A lock held for the whole action keeps two actions from interleaving.
"""
import asyncio
import logging
from typing import Callable, Optional

from sleep_tracker.formatting import format_nights
from sleep_tracker.models import SleepNight, SleepNightRead, now_millis
from sleep_tracker.observable import Event, LiveValue
from sleep_tracker.store import SleepStore

logger = logging.getLogger(__name__)


class SleepTrackerCoordinator:
    def __init__(
        self,
        store: SleepStore,
        clock: Callable[[], int] = now_millis,
        formatter: Callable[[list[SleepNight]], str] = format_nights,
    ):
        self.store = store
        self._clock = clock
        self._action_lock = asyncio.Lock()

        self.tonight: LiveValue[Optional[SleepNight]] = LiveValue(None, name="tonight")
        self.nights: LiveValue[list[SleepNight]] = store.nights

        self.nights_text = self.nights.map(formatter, name="nights_text")
        self.start_button_visible = self.tonight.map(lambda night: night is None, name="start_button_visible")
        self.stop_button_visible = self.tonight.map(lambda night: night is not None, name="stop_button_visible")
        self.clear_button_visible = self.nights.map(bool, name="clear_button_visible")

        self.show_snackbar_event: Event[bool] = Event(name="show_snackbar_event")
        self.navigate_to_sleep_quality: Event[SleepNight] = Event(name="navigate_to_sleep_quality")

    async def initialize(self) -> None:
        await self.store.get_all()
        self.tonight.set(await self._get_tonight_from_database())

    async def _get_tonight_from_database(self) -> Optional[SleepNight]:
        night = await self.store.get_tonight()
        # Already stopped, so nothing is being tracked.
        if night is not None and not night.in_progress:
            return None
        return night

    def done_showing_snackbar(self) -> Optional[bool]:
        return self.show_snackbar_event.consume()

    def done_navigating(self) -> Optional[SleepNight]:
        return self.navigate_to_sleep_quality.consume()

    async def on_start_tracking(self) -> bool:
        """Start a new night. Returns False, without touching the store, if one is already running."""
        async with self._action_lock:
            if self.tonight.value is not None:
                return False
            new_night = SleepNight.begin(self._clock())
            await self.store.insert(new_night)
            tonight = await self._get_tonight_from_database()
            self.tonight.set(tonight)
            logger.info("Started tracking night %s", tonight.id if tonight else None)
            return True

    async def on_stop_tracking(self) -> None:
        async with self._action_lock:
            old_night = self.tonight.value
            if old_night is None:
                return
            # end_time == start_time means "still running", so never store that on stop.
            stopping = SleepNight(
                id=old_night.id,
                start_time=old_night.start_time,
                end_time=max(self._clock(), old_night.start_time + 1),
                quality_rating=old_night.quality_rating,
            )
            stopped = await self.store.update(stopping)
            self.tonight.set(None)
            logger.info("Stopped tracking night %s", stopped.id)
            self.navigate_to_sleep_quality.fire(stopped)

    async def on_clear(self) -> None:
        async with self._action_lock:
            await self.store.clear()
            self.tonight.set(None)
            logger.info("Cleared sleep history")
            self.show_snackbar_event.fire(True)

    def close(self) -> None:
        """Unhook the derived values from the store's live list and from tonight."""
        for derived in (
            self.nights_text,
            self.clear_button_visible,
            self.start_button_visible,
            self.stop_button_visible,
        ):
            derived.detach()

    def snapshot(self) -> dict:
        tonight = self.tonight.value
        navigate = self.navigate_to_sleep_quality.value
        return {
            "tonight": SleepNightRead.from_night(tonight) if tonight is not None else None,
            "nights_text": self.nights_text.value,
            "start_button_visible": self.start_button_visible.value,
            "stop_button_visible": self.stop_button_visible.value,
            "clear_button_visible": self.clear_button_visible.value,
            "show_snackbar": self.show_snackbar_event.pending,
            "navigate_to_sleep_quality": SleepNightRead.from_night(navigate) if navigate is not None else None,
        }
