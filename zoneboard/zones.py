from typing import Sequence

from .classify import is_swim
from .utils_num import round_half_up

# points per minute spent in zone 1..5
ZONE_WEIGHTS = (1, 2, 3, 4, 5)

# upper bounds (exclusive) as % of max HR for zones 1..4; the rest is zone 5
PERCENT_MAX_BOUNDS = (60, 70, 80, 90)

def _empty() -> list[float]:
    return [0.0, 0.0, 0.0, 0.0, 0.0]

def custom_zone_bounds(hr_zones: dict | None) -> list[dict] | None:
    """Zone boundaries out of a Strava /athlete/zones payload, if present."""
    if not hr_zones:
        return None
    zones = (hr_zones.get("heart_rate") or {}).get("zones")
    return zones or None

def zone_index_custom(hr: float, zones: Sequence[dict]) -> int | None:
    # highest zone first: a boundary value shared by two zones goes up
    top = zones[4]
    if hr >= top["min"] and (top["max"] == -1 or hr <= top["max"]):
        return 4
    for i in (3, 2, 1, 0):
        if zones[i]["min"] <= hr <= zones[i]["max"]:
            return i
    return None

def zone_index_percent(hr: float, max_hr: float) -> int:
    pct = hr / max_hr * 100
    for i, bound in enumerate(PERCENT_MAX_BOUNDS):
        if pct < bound:
            return i
    return 4

def zone_times(
    hr_data: Sequence[float],
    time_data: Sequence[float],
    zones: Sequence[dict] | None = None,
    max_hr: float | None = None,
) -> list[float]:
    """
    Seconds in each of the five zones. Sample i lasts until sample i+1.
    Custom zones win over the %-of-max-HR fallback; with neither, nothing counts.
    """
    out = _empty()
    if zones is not None and len(zones) != 5:
        return out
    if zones is None and not max_hr:
        return out

    for i in range(min(len(hr_data), len(time_data)) - 1):
        hr = hr_data[i]
        duration = time_data[i + 1] - time_data[i]
        if zones is not None:
            idx = zone_index_custom(hr, zones)
        else:
            idx = zone_index_percent(hr, max_hr)
        if idx is not None:
            out[idx] += duration
    return out

def zone_points(seconds: Sequence[float]) -> float:
    return sum(s / 60.0 * w for s, w in zip(seconds, ZONE_WEIGHTS))

SWIM_POINTS_PER_MINUTE = 4

def fallback_points(sport_type: str | None, moving_time_s: float, has_hr: bool) -> float | None:
    """
    Points that do not come from HR zones: swims score 4 per minute (whole
    points), activities without HR data score 1 per minute. None means the
    zone times decide.
    """
    minutes = (moving_time_s or 0) / 60
    if is_swim(sport_type):
        return round_half_up(minutes * SWIM_POINTS_PER_MINUTE)
    if not has_hr:
        return minutes
    return None
