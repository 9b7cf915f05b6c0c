from datetime import datetime
from typing import Iterable, Sequence

from .records import ActivityRecord, AthleteRecord, competition_view
from .utils_time import week_window

def summarize_points(activities: Sequence[ActivityRecord]) -> dict:
    return {
        "total_points": sum(a.zone_points for a in activities),
        "activity_count": len(activities),
    }

def leaderboard(athletes: Iterable[AthleteRecord], activities: Iterable[ActivityRecord]) -> list[dict]:
    by_athlete: dict = {}
    for a in competition_view(activities):
        by_athlete.setdefault(a.athlete_id, []).append(a)

    rows = []
    for athlete in athletes:
        acts = by_athlete.get(athlete.id)
        if not acts:
            continue
        rows.append({
            "athlete_id": athlete.id,
            "firstname": athlete.firstname,
            "lastname": athlete.lastname,
            **summarize_points(acts),
        })
    rows.sort(key=lambda r: r["total_points"], reverse=True)
    return rows

def weekly_leaderboard(
    athletes: Iterable[AthleteRecord],
    activities: Iterable[ActivityRecord],
    now: datetime,
) -> dict:
    start, end = week_window(now)
    week = [
        a for a in competition_view(activities)
        if a.start_date is not None and start <= a.start_date < end
    ]
    profiles = {ath.id: ath for ath in athletes}

    stats: dict = {}
    for a in week:
        row = stats.get(a.athlete_id)
        if row is None:
            ath = profiles.get(a.athlete_id)
            row = stats[a.athlete_id] = {
                "athlete_id": a.athlete_id,
                "firstname": (ath.firstname if ath else None) or "",
                "lastname": (ath.lastname if ath else None) or "",
                "profile_image_url": ath.profile_image_url if ath else None,
                "total_points": 0.0,
                "activity_count": 0,
                "total_distance_m": 0.0,
                "total_time_s": 0.0,
            }
        row["total_points"] += a.zone_points
        row["activity_count"] += 1
        row["total_distance_m"] += a.distance_m
        row["total_time_s"] += a.moving_time_s

    board = sorted(stats.values(), key=lambda r: r["total_points"], reverse=True)
    return {
        "week_start": start.isoformat(),
        "week_end": end.isoformat(),
        "leaderboard": board,
        "stats": {
            "total_activities": len(week),
            "total_points": sum(a.zone_points for a in week),
            "total_distance_m": sum(a.distance_m for a in week),
            "total_time_s": sum(a.moving_time_s for a in week),
        },
    }
