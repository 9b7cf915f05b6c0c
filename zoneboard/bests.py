"""
Personal bests, best weeks, day streaks and milestone progress for one
athlete. Hidden activities never count; everything else does, in or out of the
competition window.
"""
from datetime import datetime, timedelta
from typing import Sequence

from .breakdown import UNKNOWN_SPORT
from .records import ActivityRecord, ZONE_FIELDS
from .utils_time import day_of, week_key

POINT_MILESTONES = (100, 250, 500, 1000, 2500, 5000, 10000)
DISTANCE_MILESTONES = (10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000)  # meters
TIME_MILESTONES = (3600, 18000, 36000, 72000, 180000, 360000)  # 1h .. 100h
ACTIVITY_MILESTONES = (5, 10, 25, 50, 100, 250, 500)

def _ref(a: ActivityRecord, sport: bool = True) -> dict:
    out = {
        "id": a.id,
        "name": a.name,
        "start_date": a.start_date.isoformat() if a.start_date else None,
    }
    if sport:
        out["sport_type"] = a.sport_type
    return out

def _zone_seconds(a: ActivityRecord, field: str) -> int:
    return getattr(a.heart_rate_zones, field) if a.heart_rate_zones else 0

def record_bests(activities: Sequence[ActivityRecord]) -> dict:
    """Single-activity records. On ties the first activity seen keeps the record."""
    top_points = max(activities, key=lambda a: a.zone_points)
    longest = max(activities, key=lambda a: a.moving_time_s)
    farthest = max(activities, key=lambda a: a.distance_m)
    hardest = max(activities, key=lambda a: a.average_heartrate or 0)

    zone_records = {}
    for i, field in enumerate(ZONE_FIELDS, start=1):
        best = max(activities, key=lambda a: _zone_seconds(a, field))
        zone_records[f"zone{i}"] = {"activity": _ref(best), "time_seconds": _zone_seconds(best, field)}

    by_sport: dict[str, list[ActivityRecord]] = {}
    for a in activities:
        by_sport.setdefault(a.sport_type or UNKNOWN_SPORT, []).append(a)
    sport_bests = {}
    for sport, acts in by_sport.items():
        pts = max(acts, key=lambda a: a.zone_points)
        longest_in_sport = max(acts, key=lambda a: a.moving_time_s)
        sport_bests[sport] = {
            "count": len(acts),
            "bestPoints": {"activity": _ref(pts, sport=False), "points": pts.zone_points},
            "longestTime": {
                "activity": _ref(longest_in_sport, sport=False),
                "time_seconds": longest_in_sport.moving_time_s,
            },
        }

    return {
        "highestPoints": {"activity": _ref(top_points), "points": top_points.zone_points},
        "longestDuration": {"activity": _ref(longest), "time_seconds": longest.moving_time_s},
        "longestDistance": {"activity": _ref(farthest), "distance_m": farthest.distance_m},
        "zoneRecords": zone_records,
        "highestAvgHR": {"activity": _ref(hardest), "avg_hr": hardest.average_heartrate or 0},
        "sportBests": sport_bests,
    }

def week_records(activities: Sequence[ActivityRecord]) -> dict:
    weeks: dict[str, dict] = {}
    for a in activities:
        if a.start_date is None:
            continue
        key = week_key(a.start_date)
        week = weeks.setdefault(key, {"weekStart": key, "points": 0.0, "activities": 0})
        week["points"] += a.zone_points
        week["activities"] += 1

    rows = list(weeks.values())
    if not rows:
        return {
            "bestWeekPoints": None,
            "mostActiveWeek": None,
            "averages": {"pointsPerWeek": 0, "activitiesPerWeek": 0},
            "totalWeeks": 0,
        }
    best = max(rows, key=lambda w: w["points"])
    busiest = max(rows, key=lambda w: w["activities"])
    return {
        "bestWeekPoints": dict(best),
        "mostActiveWeek": dict(busiest),
        "averages": {
            "pointsPerWeek": sum(w["points"] for w in rows) / len(rows),
            "activitiesPerWeek": sum(w["activities"] for w in rows) / len(rows),
        },
        "totalWeeks": len(rows),
    }

def streaks(activities: Sequence[ActivityRecord], now: datetime) -> dict:
    """
    Runs of consecutive UTC days with at least one activity. The current
    streak counts back from today and is 0 when today has no activity.
    """
    days = sorted({day_of(a.start_date) for a in activities if a.start_date is not None})

    longest = run = 0
    previous = None
    for d in days:
        run = run + 1 if previous is not None and d - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = d

    active = set(days)
    current = 0
    check = day_of(now)
    while check in active:
        current += 1
        check -= timedelta(days=1)

    return {"longestStreak": longest, "currentStreak": current, "totalActiveDays": len(days)}

def _next_goal(value: float, thresholds: Sequence[int]) -> int | None:
    return next((m for m in thresholds if value < m), None)

def milestones(activities: Sequence[ActivityRecord]) -> dict:
    totals = {
        "points": sum(a.zone_points for a in activities),
        "distance": sum(a.distance_m for a in activities),
        "time": sum(a.moving_time_s for a in activities),
        "activities": len(activities),
    }
    ladders = {
        "points": POINT_MILESTONES,
        "distance": DISTANCE_MILESTONES,
        "time": TIME_MILESTONES,
        "activities": ACTIVITY_MILESTONES,
    }

    achieved, next_goals, progress = {}, {}, {}
    for key, ladder in ladders.items():
        value = totals[key]
        goal = _next_goal(value, ladder)
        achieved[key] = [m for m in ladder if value >= m]
        next_goals[key] = goal
        progress[key] = value / goal * 100 if goal else 100

    return {
        "totals": {
            "points": totals["points"],
            "distance_m": totals["distance"],
            "time_s": totals["time"],
            "activities": totals["activities"],
        },
        "achieved": achieved,
        "nextGoals": next_goals,
        "progress": progress,
    }

def personal_bests(activities: Sequence[ActivityRecord], now: datetime) -> dict:
    visible = [a for a in activities if a.hidden is not True]
    if not visible:
        return {"hasData": False, "message": "No activities found"}
    return {
        "hasData": True,
        "personalBests": record_bests(visible),
        "weeklyStats": week_records(visible),
        "streaks": streaks(visible, now),
        "milestones": milestones(visible),
        "totalActivities": len(visible),
    }
