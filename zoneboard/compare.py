"""
Head-to-head comparison of two athletes.

Each metric names a winner (1, 2 or None on a tie) and the winner's lead over
the loser in percent. A loser sitting at zero gives a flat 100.
"""
from typing import Sequence

from .breakdown import derive_stats, sport_breakdown, zone_distribution
from .errors import NotFoundError
from .records import ActivityRecord, AthleteRecord

METRICS = (
    ("totalPoints", "Total Points", "number"),
    ("activityCount", "Activities", "number"),
    ("avgPointsPerWeek", "Pts/Week", "decimal"),
    ("avgPointsPerActivity", "Pts/Activity", "decimal"),
    ("consistency", "Consistency", "percent"),
    ("highZoneRatio", "High Zone %", "percent"),
    ("totalDistance", "Distance", "distance"),
    ("totalTime", "Time", "time"),
)

def lead_percent(winner_value: float, loser_value: float) -> float:
    if loser_value == 0:
        return 100.0
    return (winner_value - loser_value) / loser_value * 100

def compare_metric(val1: float, val2: float) -> tuple[int | None, float]:
    if val1 > val2:
        return 1, lead_percent(val1, val2)
    if val2 > val1:
        return 2, lead_percent(val2, val1)
    return None, 0.0

def compare_stats(stats1: dict, stats2: dict) -> dict:
    results = []
    for key, label, fmt in METRICS:
        val1 = stats1.get(key) or 0
        val2 = stats2.get(key) or 0
        winner, diff = compare_metric(val1, val2)
        results.append({
            "key": key,
            "label": label,
            "format": fmt,
            "athlete1Value": val1,
            "athlete2Value": val2,
            "winner": winner,
            "diffPercent": diff,
        })

    wins1 = sum(1 for r in results if r["winner"] == 1)
    wins2 = sum(1 for r in results if r["winner"] == 2)
    if wins1 > wins2:
        leader = 1
    elif wins2 > wins1:
        leader = 2
    else:
        leader = None

    return {
        "metrics": results,
        "athlete1Wins": wins1,
        "athlete2Wins": wins2,
        "overallLeader": leader,
    }

def comparison_profile(athlete: AthleteRecord, activities: Sequence[ActivityRecord]) -> dict:
    sports = sport_breakdown(activities)
    return {
        "athlete": athlete.profile(),
        "stats": derive_stats(activities),
        "zoneDistribution": zone_distribution(activities),
        "sportBreakdown": sports,
        "sportCount": len(sports),
    }

def compare_athletes(
    athlete1: AthleteRecord | None,
    activities1: Sequence[ActivityRecord],
    athlete2: AthleteRecord | None,
    activities2: Sequence[ActivityRecord],
) -> dict:
    if athlete1 is None:
        raise NotFoundError("athlete 1 not found")
    if athlete2 is None:
        raise NotFoundError("athlete 2 not found")

    profile1 = comparison_profile(athlete1, activities1)
    profile2 = comparison_profile(athlete2, activities2)
    return {
        "athlete1": profile1,
        "athlete2": profile2,
        "comparison": compare_stats(profile1["stats"], profile2["stats"]),
    }
