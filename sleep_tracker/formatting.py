"""
Plain-text rendering of sleep nights for the tracker screen.
"""
from datetime import datetime, timezone
from typing import Iterable

from sleep_tracker.models import SleepNight

QUALITY_LABELS = {
    0: "Very bad",
    1: "Poor",
    2: "So-so",
    3: "OK",
    4: "Pretty good",
    5: "Excellent",
}


def quality_label(quality: int) -> str:
    return QUALITY_LABELS.get(quality, "--")


def format_timestamp(millis: int) -> str:
    """Format as e.g. 'Monday Jan-05-2026 Time: 22:10' (UTC)."""
    dt = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    return dt.strftime("%A %b-%d-%Y Time: %H:%M")


def format_duration(start_millis: int, end_millis: int) -> str:
    total_seconds = max(0, (end_millis - start_millis) // 1000)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_night(night: SleepNight) -> str:
    if night.in_progress:
        end = "--"
        duration = "--"
    else:
        end = format_timestamp(night.end_time)
        duration = format_duration(night.start_time, night.end_time)
    return "\n".join(
        [
            f"Start: {format_timestamp(night.start_time)}",
            f"End: {end}",
            f"Quality: {quality_label(night.quality_rating)}",
            f"Hours:Minutes:Seconds: {duration}",
        ]
    )


def format_nights(nights: Iterable[SleepNight]) -> str:
    """Render every night, separated by a blank line. Empty input gives ''."""
    return "\n\n".join(format_night(n) for n in nights)
