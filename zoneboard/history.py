import math
from datetime import datetime, timedelta
from typing import Sequence

from .records import ActivityRecord
from .utils_num import round1
from .utils_time import day_of, week_start

def _week_label(d) -> str:
    return f"{d.strftime('%b')} {d.day}"

def weekly_history(
    activities: Sequence[ActivityRecord],
    competition_start: datetime,
    now: datetime,
) -> dict:
    """
    Week-over-week points from the competition's first week up to ``now``.
    Weeks with no activity are zero-filled.
    """
    weekly: dict = {}
    for a in activities:
        if a.start_date is None or not a.zone_points:
            continue
        key = week_start(day_of(a.start_date))
        row = weekly.setdefault(key, {"points": 0.0, "activityCount": 0})
        row["points"] += a.zone_points
        row["activityCount"] += 1

    weeks = []
    cumulative = 0.0
    current = week_start(day_of(competition_start))
    last = day_of(now)
    while current <= last:
        data = weekly.get(current, {"points": 0.0, "activityCount": 0})
        cumulative += data["points"]
        weeks.append({
            "weekStart": current.isoformat(),
            "weekEnd": (current + timedelta(days=6)).isoformat(),
            "weekLabel": _week_label(current),
            "points": round1(data["points"]),
            "activityCount": data["activityCount"],
            "cumulativePoints": round1(cumulative),
        })
        current += timedelta(days=7)

    best = None
    for w in weeks:
        if w["points"] > (best["points"] if best else 0):
            best = w
    if best is None and weeks:
        best = weeks[0]
    current_week = weeks[-1] if weeks else None
    previous_week = weeks[-2] if len(weeks) > 1 else None

    return {
        "weeks": weeks,
        "summary": {
            "totalPoints": round1(cumulative),
            "avgPointsPerWeek": round1(cumulative / len(weeks)) if weeks else 0,
            "bestWeek": {"label": best["weekLabel"], "points": best["points"]} if best else None,
            "currentWeek": {
                "label": current_week["weekLabel"] if current_week else "",
                "points": current_week["points"] if current_week else 0,
            },
            "weekOverWeekChange": (
                round1(current_week["points"] - previous_week["points"]) if previous_week else None
            ),
            "totalWeeks": len(weeks),
        },
    }

def activity_calendar(activities: Sequence[ActivityRecord], now: datetime) -> dict:
    """Per-day totals for a heatmap, with a 0-4 intensity relative to the best day."""
    daily: dict[str, dict] = {}
    for a in activities:
        if a.start_date is None:
            continue
        key = day_of(a.start_date).isoformat()
        day = daily.setdefault(key, {
            "date": key, "points": 0.0, "activities": 0, "sports": [],
            "totalTime": 0.0, "totalDistance": 0.0,
        })
        day["points"] += a.zone_points
        day["activities"] += 1
        day["totalTime"] += a.moving_time_s
        day["totalDistance"] += a.distance_m
        if a.sport_type not in day["sports"]:
            day["sports"].append(a.sport_type)

    all_points = [d["points"] for d in daily.values()]
    max_points = max(all_points + [1])
    calendar = [
        {**d, "intensity": min(4, math.ceil(d["points"] / max_points * 4))}
        for d in sorted(daily.values(), key=lambda d: d["date"])
    ]

    return {
        "calendar": calendar,
        "stats": {
            "totalDays": len(daily),
            "totalPoints": sum(all_points),
            "maxDailyPoints": max_points,
            "avgDailyPoints": sum(all_points) / len(all_points) if all_points else 0,
        },
        "range": {
            "start": day_of(now).replace(month=1, day=1).isoformat(),
            "end": day_of(now).isoformat(),
        },
    }
