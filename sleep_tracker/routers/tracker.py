"""
Sleep tracker: start/stop/clear nights, consume one-shot UI events,
list nights and rate a stopped night.
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from sleep_tracker.models import QualityRequest, SleepNightRead
from sleep_tracker.quality import SleepQualityCoordinator
from sleep_tracker.store import SleepNightNotFoundError, SleepStore
from sleep_tracker.tracker import SleepTrackerCoordinator

router = APIRouter(prefix="/api", tags=["tracker"])


def get_store(request: Request) -> SleepStore:
    return request.app.state.store


def get_tracker(request: Request) -> SleepTrackerCoordinator:
    return request.app.state.tracker


@router.get("/tracker")
async def tracker_state(tracker: SleepTrackerCoordinator = Depends(get_tracker)):
    """Current tonight, button visibility, formatted nights and pending events."""
    return tracker.snapshot()


@router.post("/tracker/start")
async def start_tracking(tracker: SleepTrackerCoordinator = Depends(get_tracker)):
    """Start tonight. 409 while a night is already being tracked."""
    if not await tracker.on_start_tracking():
        raise HTTPException(status_code=409, detail="A night is already being tracked")
    return tracker.snapshot()


@router.post("/tracker/stop")
async def stop_tracking(tracker: SleepTrackerCoordinator = Depends(get_tracker)):
    """Stop tonight. Does nothing when no night is being tracked."""
    await tracker.on_stop_tracking()
    return tracker.snapshot()


@router.post("/tracker/clear")
async def clear_nights(tracker: SleepTrackerCoordinator = Depends(get_tracker)):
    await tracker.on_clear()
    return tracker.snapshot()


@router.post("/tracker/snackbar/done")
async def done_showing_snackbar(tracker: SleepTrackerCoordinator = Depends(get_tracker)):
    return {"consumed": tracker.done_showing_snackbar()}


@router.post("/tracker/navigation/done")
async def done_navigating(tracker: SleepTrackerCoordinator = Depends(get_tracker)):
    night = tracker.done_navigating()
    return {"consumed": SleepNightRead.from_night(night) if night is not None else None}


@router.get("/nights", response_model=list[SleepNightRead])
async def list_nights(store: SleepStore = Depends(get_store)):
    """All nights, newest first."""
    nights = await store.get_all()
    return [SleepNightRead.from_night(n) for n in nights.value]


@router.get("/nights/{night_id}", response_model=SleepNightRead)
async def get_night(night_id: int, store: SleepStore = Depends(get_store)):
    night = await store.get(night_id)
    if night is None:
        raise HTTPException(status_code=404, detail="Night not found")
    return SleepNightRead.from_night(night)


@router.post("/nights/{night_id}/quality", response_model=SleepNightRead)
async def set_sleep_quality(
    night_id: int,
    req: QualityRequest,
    store: SleepStore = Depends(get_store),
):
    """Record the quality rating (0-5) of a night."""
    coordinator = SleepQualityCoordinator(store, night_id)
    try:
        night = await coordinator.on_set_sleep_quality(req.quality)
    except SleepNightNotFoundError:
        raise HTTPException(status_code=404, detail="Night not found")
    return SleepNightRead.from_night(night)
