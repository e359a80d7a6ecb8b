"""
Rating step that follows a stopped night.
"""
import logging
from typing import Optional

from sleep_tracker.models import MAX_QUALITY, MIN_QUALITY, SleepNight
from sleep_tracker.observable import Event
from sleep_tracker.store import SleepNightNotFoundError, SleepStore

logger = logging.getLogger(__name__)


class SleepQualityCoordinator:
    def __init__(self, store: SleepStore, night_id: int):
        self.store = store
        self.night_id = night_id
        self.navigate_to_sleep_tracker: Event[bool] = Event(name="navigate_to_sleep_tracker")

    def done_navigating(self) -> Optional[bool]:
        return self.navigate_to_sleep_tracker.consume()

    async def on_set_sleep_quality(self, quality: int) -> SleepNight:
        if not MIN_QUALITY <= quality <= MAX_QUALITY:
            raise ValueError(f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}")
        night = await self.store.get(self.night_id)
        if night is None:
            raise SleepNightNotFoundError(self.night_id)
        night.quality_rating = quality
        rated = await self.store.update(night)
        logger.info("Rated night %s as %s", rated.id, quality)
        self.navigate_to_sleep_tracker.fire(True)
        return rated
