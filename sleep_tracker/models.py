from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field as PydanticField
from sqlmodel import SQLModel, Field

UNRATED = -1
MIN_QUALITY = 0
MAX_QUALITY = 5


def now_millis() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class SleepNight(SQLModel, table=True):
    __tablename__ = "daily_sleep_quality_table"

    id: Optional[int] = Field(default=None, primary_key=True)
    start_time: int = Field(default_factory=now_millis)
    end_time: Optional[int] = Field(default=None, nullable=False)
    quality_rating: int = UNRATED

    def __init__(self, **data):
        super().__init__(**data)
        # Unset end_time means "not stopped yet", stored as end_time == start_time.
        if self.end_time is None:
            self.end_time = self.start_time

    @classmethod
    def begin(cls, start_time: Optional[int] = None) -> "SleepNight":
        """New night with end_time equal to start_time (not yet stopped)."""
        if start_time is None:
            start_time = now_millis()
        return cls(start_time=start_time, end_time=start_time)

    @property
    def in_progress(self) -> bool:
        return self.end_time == self.start_time

    @property
    def rated(self) -> bool:
        return self.quality_rating != UNRATED


class SleepNightRead(BaseModel):
    id: int
    start_time: int
    end_time: int
    quality_rating: int
    in_progress: bool
    rated: bool

    @classmethod
    def from_night(cls, night: SleepNight) -> "SleepNightRead":
        return cls(
            id=night.id,
            start_time=night.start_time,
            end_time=night.end_time,
            quality_rating=night.quality_rating,
            in_progress=night.in_progress,
            rated=night.rated,
        )


class QualityRequest(BaseModel):
    quality: int = PydanticField(ge=MIN_QUALITY, le=MAX_QUALITY)
