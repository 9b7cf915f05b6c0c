"""CSV export of every athlete's activities."""
import csv
import io
import math
from typing import Iterable, Sequence

from .records import ActivityRecord, AthleteRecord
from .utils_num import round_half_up
from .zones import ZONE_WEIGHTS

METERS_PER_MILE = 1609.344

COLUMNS = [
    "activity_id", "strava_activity_id", "athlete_id", "strava_athlete_id",
    "firstname", "lastname", "activity_name", "sport_type", "start_date",
    "distance_m", "distance_km", "distance_miles",
    "moving_time_s", "moving_time_formatted",
    "average_heartrate", "max_heartrate", "average_speed_mps",
    "pace_min_per_km", "pace_min_per_mile", "total_elevation_gain_m",
    "zone_points",
    "zone_1_time_s", "zone_2_time_s", "zone_3_time_s", "zone_4_time_s", "zone_5_time_s",
    "zone_1_points", "zone_2_points", "zone_3_points", "zone_4_points", "zone_5_points",
    "in_competition_window", "hidden",
]

def _num(value) -> str:
    # blank for missing or zero; whole floats print without ".0"
    if not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def format_duration(seconds: float | None) -> str:
    """h:mm:ss, or m:ss under an hour."""
    if not seconds:
        return ""
    hrs = int(seconds // 3600)
    mins = int(seconds % 3600 // 60)
    secs = int(seconds % 60)
    if hrs > 0:
        return f"{hrs}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"

def pace_per(meters: float, speed_mps: float | None) -> str:
    """m:ss to cover ``meters`` at ``speed_mps``."""
    if not speed_mps:
        return ""
    minutes = meters / speed_mps / 60
    whole = math.floor(minutes)
    secs = int(round_half_up((minutes - whole) * 60))
    return f"{whole}:{secs:02d}"

def _km(m: float) -> str:
    return f"{m / 1000:.2f}" if m else ""

def _miles(m: float) -> str:
    return f"{m / METERS_PER_MILE:.2f}" if m else ""

def export_row(activity: ActivityRecord, athlete: AthleteRecord | None) -> list:
    zones = activity.heart_rate_zones.as_list() if activity.heart_rate_zones else [0, 0, 0, 0, 0]
    return [
        activity.id,
        activity.strava_activity_id or "",
        activity.athlete_id,
        (athlete.strava_athlete_id if athlete else None) or "",
        (athlete.firstname if athlete else None) or "",
        (athlete.lastname if athlete else None) or "",
        activity.name or "",
        activity.sport_type or "",
        activity.start_date.isoformat() if activity.start_date else "",
        _num(activity.distance_m),
        _km(activity.distance_m),
        _miles(activity.distance_m),
        _num(activity.moving_time_s),
        format_duration(activity.moving_time_s),
        _num(activity.average_heartrate),
        _num(activity.max_heartrate),
        _num(activity.average_speed_mps),
        pace_per(1000, activity.average_speed_mps),
        pace_per(METERS_PER_MILE, activity.average_speed_mps),
        _num(activity.total_elevation_gain_m),
        _num(activity.zone_points),
        *zones,
        *(f"{s / 60 * w:.2f}" for s, w in zip(zones, ZONE_WEIGHTS)),
        "true" if activity.in_competition_window else "false",
        "true" if activity.hidden else "false",
    ]

def export_csv(athletes: Iterable[AthleteRecord], activities: Sequence[ActivityRecord]) -> str:
    by_id = {a.id: a for a in athletes}
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(COLUMNS)
    for activity in activities:
        writer.writerow(export_row(activity, by_id.get(activity.athlete_id)))
    return out.getvalue()
