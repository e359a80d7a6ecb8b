"""Tests for rating a stopped night."""

import pytest

from sleep_tracker.models import SleepNight
from sleep_tracker.quality import SleepQualityCoordinator
from sleep_tracker.store import SleepNightNotFoundError


@pytest.mark.asyncio
async def test_set_quality_updates_night_and_navigates(store):
    night = await store.insert(SleepNight(start_time=100, end_time=200))
    coordinator = SleepQualityCoordinator(store, night.id)

    rated = await coordinator.on_set_sleep_quality(4)

    assert rated.quality_rating == 4
    assert rated.rated
    assert (await store.get(night.id)).quality_rating == 4
    assert coordinator.done_navigating() is True
    assert coordinator.done_navigating() is None


@pytest.mark.asyncio
@pytest.mark.parametrize("quality", [-1, 6])
async def test_set_quality_rejects_out_of_range(store, quality):
    night = await store.insert(SleepNight(start_time=100, end_time=200))
    coordinator = SleepQualityCoordinator(store, night.id)

    with pytest.raises(ValueError):
        await coordinator.on_set_sleep_quality(quality)

    assert not (await store.get(night.id)).rated
    assert not coordinator.navigate_to_sleep_tracker.pending


@pytest.mark.asyncio
async def test_set_quality_on_missing_night(store):
    coordinator = SleepQualityCoordinator(store, 99)

    with pytest.raises(SleepNightNotFoundError):
        await coordinator.on_set_sleep_quality(3)

    assert not coordinator.navigate_to_sleep_tracker.pending
