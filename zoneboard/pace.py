"""
Pace and speed trends per sport.

Runs and everything else are scored in min/mi, swims in min/100m and rides in
mph. Activities flagged ``exclude_from_pace_analysis`` never enter the numbers.
"""
from typing import Sequence

from .breakdown import UNKNOWN_SPORT
from .records import ActivityRecord
from .utils_time import week_key

METERS_PER_MILE = 1609.34
CHART_WEEKS = 12
TREND_WINDOW = 5
# percent change needed before a trend counts as improving or declining
TREND_THRESHOLD = 3

def is_speed_sport(sport: str) -> bool:
    s = sport.lower()
    return "ride" in s or "cycle" in s or "bike" in s

def pace_of(sport: str, distance_m: float, time_s: float) -> tuple[float, str]:
    if "swim" in sport.lower():
        return (time_s / 60) / (distance_m / 100), "min/100m"
    miles = distance_m / METERS_PER_MILE
    if is_speed_sport(sport):
        return miles / (time_s / 3600), "mph"
    return (time_s / 60) / miles, "min/mi"

def pace_eligible(activity: ActivityRecord) -> bool:
    return (
        not activity.exclude_from_pace_analysis
        and activity.hidden is not True
        and activity.start_date is not None
        and activity.distance_m > 0
        and activity.moving_time_s > 0
    )

def _mean(values) -> float:
    return sum(values) / len(values)

def _change(earlier: float, recent: float, speed: bool) -> float:
    # positive means better: faster speed, or fewer minutes per unit
    if speed:
        return (recent - earlier) / earlier * 100
    return (earlier - recent) / earlier * 100

def _trend(paces: list[float], speed: bool) -> str:
    last = paces[-TREND_WINDOW:]
    prev = paces[-2 * TREND_WINDOW:-TREND_WINDOW]
    if len(prev) < 3 or len(last) < 3:
        return "stable"
    pct = _change(_mean(prev), _mean(last), speed)
    if pct > TREND_THRESHOLD:
        return "improving"
    if pct < -TREND_THRESHOLD:
        return "declining"
    return "stable"

def _weekly_chart(points: list[dict]) -> list[dict]:
    weeks: dict[str, list[float]] = {}
    for p in points:
        weeks.setdefault(week_key(p["start_date"]), []).append(p["pace"])
    chart = [
        {"week": week, "avgPace": _mean(paces), "count": len(paces)}
        for week, paces in sorted(weeks.items())
    ]
    return chart[-CHART_WEEKS:]

def _ref(point: dict) -> dict:
    return {"value": point["pace"], "date": point["date"], "name": point["name"]}

def sport_pace_summary(points: list[dict]) -> dict:
    """Trend summary for one sport's pace points, oldest first."""
    speed = is_speed_sport(points[0]["sport"])
    paces = [p["pace"] for p in points]

    mid = len(points) // 2
    earlier_avg = _mean(paces[:mid])
    recent_avg = _mean(paces[mid:])

    if speed:
        best = max(points, key=lambda p: p["pace"])
        worst = min(points, key=lambda p: p["pace"])
    else:
        best = min(points, key=lambda p: p["pace"])
        worst = max(points, key=lambda p: p["pace"])

    recent = [{k: v for k, v in p.items() if k not in ("sport", "start_date")} for p in points[-TREND_WINDOW:]]
    return {
        "activityCount": len(points),
        "paceUnit": points[0]["paceUnit"],
        "isSpeedSport": speed,
        "currentAvgPace": recent_avg,
        "overallAvgPace": _mean(paces),
        "improvement": _change(earlier_avg, recent_avg, speed),
        "recentTrend": _trend(paces, speed),
        "bestPace": _ref(best),
        "worstPace": _ref(worst),
        "chartData": _weekly_chart(points),
        "recentActivities": list(reversed(recent)),
    }

def pace_analysis(activities: Sequence[ActivityRecord]) -> dict:
    """
    Per-sport pace summaries. A sport needs at least two eligible activities
    to get a summary.
    """
    eligible = sorted((a for a in activities if pace_eligible(a)), key=lambda a: a.start_date)
    if not eligible:
        return {"hasData": False, "message": "No activities with pace data found"}

    by_sport: dict[str, list[dict]] = {}
    for a in eligible:
        sport = a.sport_type or UNKNOWN_SPORT
        pace, unit = pace_of(sport, a.distance_m, a.moving_time_s)
        by_sport.setdefault(sport, []).append({
            "id": a.id,
            "name": a.name,
            "date": a.start_date.isoformat(),
            "distance_m": a.distance_m,
            "time_s": a.moving_time_s,
            "pace": pace,
            "paceUnit": unit,
            "zone_points": a.zone_points,
            "sport": sport,
            "start_date": a.start_date,
        })

    sports = {sport: sport_pace_summary(points) for sport, points in by_sport.items() if len(points) >= 2}
    return {"hasData": bool(sports), "sports": sports}
