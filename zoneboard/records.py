"""
Plain in-memory records the scoring core works on.

Everything coming out of the data store passes through these models once:
numeric fields are coerced with ``parse_or_zero`` and the heart-rate-zone
relation (a row, a one-element list, an empty list or nothing) collapses to a
single ``ZoneBreakdown`` or ``None``.
"""
from datetime import datetime
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, field_validator

from .utils_num import parse_or_zero
from .utils_time import as_utc, parse_iso

ZONE_FIELDS = (
    "zone_1_time_s", "zone_2_time_s", "zone_3_time_s", "zone_4_time_s", "zone_5_time_s",
)


class ZoneBreakdown(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    zone_1_time_s: int = 0
    zone_2_time_s: int = 0
    zone_3_time_s: int = 0
    zone_4_time_s: int = 0
    zone_5_time_s: int = 0

    @field_validator(*ZONE_FIELDS, mode="before")
    @classmethod
    def _seconds(cls, v: Any) -> int:
        return int(parse_or_zero(v))

    def as_list(self) -> list[int]:
        return [getattr(self, f) for f in ZONE_FIELDS]


def normalize_zone_breakdown(value: Any) -> ZoneBreakdown | None:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    if isinstance(value, ZoneBreakdown):
        return value
    if isinstance(value, dict):
        return ZoneBreakdown.model_validate(value)
    return ZoneBreakdown.model_validate(value, from_attributes=True)


class ActivityRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | str
    athlete_id: int | str
    strava_activity_id: int | None = None
    name: str | None = None
    sport_type: str | None = None
    start_date: datetime | None = None
    distance_m: float = 0.0
    moving_time_s: float = 0.0
    average_heartrate: float | None = None
    max_heartrate: float | None = None
    average_speed_mps: float | None = None
    total_elevation_gain_m: float | None = None
    zone_points: float = 0.0
    in_competition_window: bool = False
    hidden: bool | None = None
    exclude_from_pace_analysis: bool = False
    heart_rate_zones: ZoneBreakdown | None = None

    @field_validator("zone_points", "distance_m", "moving_time_s", mode="before")
    @classmethod
    def _numeric(cls, v: Any) -> float:
        return parse_or_zero(v)

    @field_validator("start_date", mode="before")
    @classmethod
    def _utc(cls, v: Any):
        if isinstance(v, str):
            return parse_iso(v)
        if isinstance(v, datetime):
            return as_utc(v)
        return v

    @field_validator("heart_rate_zones", mode="before")
    @classmethod
    def _one_breakdown(cls, v: Any):
        return normalize_zone_breakdown(v)

    @field_validator("in_competition_window", "exclude_from_pace_analysis", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return bool(v)


class AthleteRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | str
    strava_athlete_id: int | None = None
    firstname: str | None = None
    lastname: str | None = None
    profile_image_url: str | None = None
    hr_zones: dict | None = None

    def profile(self) -> dict:
        return {
            "id": self.id,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "profile_image_url": self.profile_image_url,
        }


def counts_for_competition(activity: ActivityRecord) -> bool:
    return activity.in_competition_window and activity.hidden is not True


def competition_view(activities: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    """Activities that count toward leaderboard and summary views."""
    return [a for a in activities if counts_for_competition(a)]


def full_history(activities: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    """Every activity, used by projections, the calendar and exports."""
    return list(activities)


def flatten_activity(activity: ActivityRecord) -> dict:
    """Activity as a JSON-ready dict with zone seconds pulled to the top level."""
    out = activity.model_dump(mode="json", exclude={"heart_rate_zones"})
    zones = activity.heart_rate_zones or ZoneBreakdown()
    for field in ZONE_FIELDS:
        out[field] = getattr(zones, field)
    return out
