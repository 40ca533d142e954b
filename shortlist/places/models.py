from __future__ import annotations

from datetime import date, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PRICE_TOKENS = ("FREE", "$", "$$", "$$$", "$$$$")


class TravelStyle(str, Enum):
    RELAXATION = "RELAXATION"
    ADVENTURE = "ADVENTURE"
    CULTURAL = "CULTURAL"
    FOODIE = "FOODIE"
    SHOPPING = "SHOPPING"
    NATURE = "NATURE"


class Budget(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    UNLIMITED = "UNLIMITED"


class TimeBlock(str, Enum):
    BREAKFAST = "BREAKFAST"
    MORNING_ACTIVITY = "MORNING_ACTIVITY"
    LUNCH = "LUNCH"
    CAFE = "CAFE"
    AFTERNOON_ACTIVITY = "AFTERNOON_ACTIVITY"
    DINNER = "DINNER"
    EVENING_ACTIVITY = "EVENING_ACTIVITY"


class Place(BaseModel):
    id: str = ""
    name: str | None = None
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    category: str | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    description: str | None = None
    operating_hours: str | None = None
    price_range: str | None = Field(
        default=None, description='One of "FREE", "$", "$$", "$$$", "$$$$"'
    )
    tags: list[str] = Field(default_factory=list)
    source: str | None = None
    travel_style: str | None = None
    time_block: str | None = None
    day: int | None = None
    recommended_time: str | None = Field(
        default=None, description='Suggested visit window, e.g. "10:00-11:30"'
    )

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, tags: list[str]) -> list[str]:
        return list(dict.fromkeys(tags))

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def has_name(self) -> bool:
        return bool(self.name and self.name.strip())


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def _ordered(self) -> DateRange:
        if self.end < self.start:
            raise ValueError("end date must not precede start date")
        return self

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def dates(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(self.days)]

    def contains_monday(self) -> bool:
        if self.days >= 7:
            return True
        return any(d.weekday() == 0 for d in self.dates())


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    travel_style: TravelStyle | None = None
    budget: Budget | None = None
    preferred_categories: list[str] = Field(default_factory=list)
    travel_dates: DateRange | None = None
    trip_days: int = Field(default=1, ge=1)
    party_size: int = Field(default=1, ge=1)


class RankedPlace(BaseModel):
    place: Place
    score: float


# ── API payloads ─────────────────────────────────────────────────────────


class DeduplicateRequest(BaseModel):
    places: list[Place]


class DeduplicateResponse(BaseModel):
    places: list[Place]
    input_count: int
    output_count: int


class RankRequest(BaseModel):
    places: list[Place]
    preferences: UserPreferences
    deduplicate: bool = True
    # Reorder the shortlist by travel-style cluster quotas.
    cluster: bool = False


class RankResponse(BaseModel):
    results: list[RankedPlace]
    total_candidates: int


class VisitTimeRequest(BaseModel):
    time_block: TimeBlock
    category: str | None = None
    operating_hours: str | None = None


class VisitTimeResponse(BaseModel):
    time_block: TimeBlock
    recommended_time: str
