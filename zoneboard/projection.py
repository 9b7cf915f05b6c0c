"""
Competition timeline and end-of-competition point projections.

``now`` is always passed in. Status moves upcoming -> active -> completed and
is recomputed from the dates on every call.
"""
import enum
import math
from datetime import datetime
from typing import Iterable, Sequence

from .records import ActivityRecord, AthleteRecord
from .utils_num import round1
from .utils_time import DAY, as_utc

class CompetitionStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"

def _days(delta) -> float:
    return delta / DAY

def build_timeline(now: datetime, start: datetime, end: datetime) -> dict:
    now, start, end = as_utc(now), as_utc(start), as_utc(end)
    has_started = now >= start
    has_ended = now > end

    total_days = math.ceil(_days(end - start))
    days_elapsed = math.floor(_days(now - start)) if has_started else 0
    if has_ended:
        days_remaining = 0
    elif has_started:
        days_remaining = math.ceil(_days(end - now))
    else:
        days_remaining = math.ceil(_days(end - start))
    days_until_start = 0 if has_started else math.ceil(_days(start - now))

    if has_ended:
        progress = 100.0
    elif has_started:
        span = (end - start).total_seconds()
        raw = (now - start).total_seconds() / span * 100 if span > 0 else 100.0
        progress = min(100.0, max(0.0, raw))
    else:
        progress = 0.0

    return {
        "total_days": total_days,
        "days_elapsed": days_elapsed,
        "days_remaining": days_remaining,
        "days_until_start": days_until_start,
        "progress_percent": round1(progress),
        "has_started": has_started,
        "has_ended": has_ended,
    }

def competition_status(timeline: dict) -> CompetitionStatus:
    if timeline["has_ended"]:
        return CompetitionStatus.COMPLETED
    if timeline["has_started"]:
        return CompetitionStatus.ACTIVE
    return CompetitionStatus.UPCOMING

def project_athlete(athlete: AthleteRecord, activities: Sequence[ActivityRecord], timeline: dict) -> dict:
    current = sum(a.zone_points for a in activities)

    per_day = 0.0
    elapsed = timeline["days_elapsed"]
    if timeline["has_started"] and elapsed > 0 and current > 0:
        per_day = current / elapsed

    if timeline["has_ended"]:
        projected = current
    else:
        projected = current + per_day * timeline["days_remaining"]

    return {
        "athlete_id": athlete.id,
        "firstname": athlete.firstname or "",
        "lastname": athlete.lastname or "",
        "current_points": current,
        "points_per_day": per_day,
        "projected_final_points": projected,
        "activity_count": len(activities),
    }

def competition_progress(
    config,
    roster: Iterable[tuple[AthleteRecord, Sequence[ActivityRecord]]],
    now: datetime,
) -> dict:
    """
    ``config`` needs name, start_date and end_date. ``roster`` pairs each
    athlete with their full activity history.
    """
    timeline = build_timeline(now, config.start_date, config.end_date)
    projections = [project_athlete(ath, acts, timeline) for ath, acts in roster]

    # sorted() is stable, so ties keep roster order
    by_projection = sorted(projections, key=lambda p: p["projected_final_points"], reverse=True)
    by_current = sorted(projections, key=lambda p: p["current_points"], reverse=True)

    return {
        "competition": {
            "name": config.name,
            "start_date": as_utc(config.start_date).isoformat(),
            "end_date": as_utc(config.end_date).isoformat(),
            "status": competition_status(timeline).value,
        },
        "timeline": timeline,
        "projections": by_projection,
        "current_standings": by_current,
    }
