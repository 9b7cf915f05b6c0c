"""Builders for records and rows used across the test suite."""
from datetime import datetime, timezone

from zoneboard.models import Activity, Athlete, CompetitionConfig, HeartRateZones
from zoneboard.records import ActivityRecord, AthleteRecord

_next_id = [0]


def _id() -> int:
    _next_id[0] += 1
    return _next_id[0]


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_activity(**kwargs) -> ActivityRecord:
    defaults = dict(
        id=_id(),
        athlete_id=1,
        sport_type="Run",
        start_date=utc(2026, 1, 14, 7, 30),
        distance_m=5000,
        moving_time_s=1800,
        zone_points=10,
        in_competition_window=True,
        hidden=None,
    )
    defaults.update(kwargs)
    return ActivityRecord.model_validate(defaults)


def make_athlete(**kwargs) -> AthleteRecord:
    defaults = dict(id=1, firstname="Sam", lastname="Rivera")
    defaults.update(kwargs)
    return AthleteRecord.model_validate(defaults)


def add_athlete(db, **kwargs) -> Athlete:
    defaults = dict(strava_athlete_id=_id() + 1000, firstname="Sam", lastname="Rivera")
    defaults.update(kwargs)
    athlete = Athlete(**defaults)
    db.add(athlete)
    db.commit()
    return athlete


def add_activity(db, athlete: Athlete, zones: tuple | None = None, **kwargs) -> Activity:
    defaults = dict(
        strava_activity_id=_id() + 50000,
        athlete_id=athlete.id,
        name="Morning Run",
        sport_type="Run",
        start_date=utc(2026, 1, 14, 7, 30),
        distance_m=5000.0,
        moving_time_s=1800,
        zone_points=10,
        in_competition_window=True,
    )
    defaults.update(kwargs)
    activity = Activity(**defaults)
    if zones is not None:
        activity.heart_rate_zones.append(HeartRateZones(
            zone_1_time_s=zones[0], zone_2_time_s=zones[1], zone_3_time_s=zones[2],
            zone_4_time_s=zones[3], zone_5_time_s=zones[4],
        ))
    db.add(activity)
    db.commit()
    return activity


def add_competition(db, name="Main Competition", start=None, end=None) -> CompetitionConfig:
    config = CompetitionConfig(
        name=name,
        start_date=start or utc(2026, 1, 1),
        end_date=end or utc(2026, 5, 3),
        is_active=True,
    )
    db.add(config)
    db.commit()
    return config
