"""
Per-athlete breakdowns: sport buckets, weekly points, time in HR zones, and the
scalar stats the comparison view ranks athletes on.

Callers pass activities already filtered for the view they serve.
"""
from typing import Sequence

from .points import summarize_points
from .records import ActivityRecord, AthleteRecord, flatten_activity
from .utils_time import day_of, week_key

UNKNOWN_SPORT = "Unknown"
RECENT_LIMIT = 10

def sport_breakdown(activities: Sequence[ActivityRecord]) -> dict[str, dict]:
    out: dict[str, dict] = {}
    for a in activities:
        sport = a.sport_type or UNKNOWN_SPORT
        bucket = out.setdefault(sport, {"count": 0, "points": 0.0, "distance_m": 0.0, "time_s": 0.0})
        bucket["count"] += 1
        bucket["points"] += a.zone_points
        bucket["distance_m"] += a.distance_m
        bucket["time_s"] += a.moving_time_s
    return out

def weekly_points(activities: Sequence[ActivityRecord]) -> dict[str, float]:
    """Points per Sunday-start week, keyed by the week's first date (YYYY-MM-DD)."""
    out: dict[str, float] = {}
    for a in activities:
        if a.start_date is None:
            continue
        key = week_key(a.start_date)
        out[key] = out.get(key, 0.0) + a.zone_points
    return out

def zone_distribution(activities: Sequence[ActivityRecord]) -> dict[str, int]:
    totals = [0, 0, 0, 0, 0]
    for a in activities:
        if a.heart_rate_zones is None:
            continue
        for i, seconds in enumerate(a.heart_rate_zones.as_list()):
            totals[i] += seconds
    return {f"zone_{i + 1}": t for i, t in enumerate(totals)}

def high_zone_ratio(zones: dict[str, int]) -> float:
    total = sum(zones.values())
    if total <= 0:
        return 0.0
    return (zones["zone_4"] + zones["zone_5"]) / total * 100

def consistency(active_days: int, week_count: int) -> float:
    # not clamped: activity on the edges of a week span can push this past 100
    if week_count <= 0:
        return 0.0
    return active_days / (week_count * 7) * 100

def derive_stats(activities: Sequence[ActivityRecord]) -> dict:
    totals = summarize_points(activities)
    total_points = totals["total_points"]
    count = totals["activity_count"]

    week_count = len(weekly_points(activities))
    active_days = len({day_of(a.start_date) for a in activities if a.start_date is not None})
    zones = zone_distribution(activities)

    return {
        "totalPoints": total_points,
        "activityCount": count,
        "totalDistance": sum(a.distance_m for a in activities),
        "totalTime": sum(a.moving_time_s for a in activities),
        "avgPointsPerWeek": total_points / max(1, week_count),
        "avgPointsPerActivity": total_points / count if count else 0.0,
        "activeDays": active_days,
        "consistency": consistency(active_days, week_count),
        "highZoneRatio": high_zone_ratio(zones),
    }

def flatten_activities(activities: Sequence[ActivityRecord]) -> list[dict]:
    return [flatten_activity(a) for a in activities]

def athlete_summary(athlete: AthleteRecord, activities: Sequence[ActivityRecord]) -> dict:
    """Summary payload for one athlete; ``activities`` are newest first."""
    return {
        "athlete": {**athlete.profile(), "hr_zones": athlete.hr_zones},
        "summary": summarize_points(activities),
        "sport_breakdown": sport_breakdown(activities),
        "weekly_stats": weekly_points(activities),
        "zone_distribution": zone_distribution(activities),
        "recent_activities": flatten_activities(activities[:RECENT_LIMIT]),
    }

