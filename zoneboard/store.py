"""Read/write access to the data store, returning core records."""
import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy.orm import Session, selectinload

from .errors import NotFoundError
from .models import Athlete, Activity, CompetitionConfig
from .records import ActivityRecord, AthleteRecord
from .utils_time import as_utc

logger = logging.getLogger(__name__)

def get_athlete(db: Session, athlete_id: int) -> AthleteRecord:
    athlete = db.get(Athlete, athlete_id)
    if athlete is None:
        raise NotFoundError(f"athlete {athlete_id} not found")
    return AthleteRecord.model_validate(athlete)

def list_athletes(db: Session) -> list[AthleteRecord]:
    return [AthleteRecord.model_validate(a) for a in db.query(Athlete).order_by(Athlete.id).all()]

def load_activities(db: Session, athlete_id: int | None = None, limit: int | None = None) -> list[ActivityRecord]:
    """Activities newest first, with their HR zone breakdown loaded."""
    q = db.query(Activity).options(selectinload(Activity.heart_rate_zones))
    if athlete_id is not None:
        q = q.filter(Activity.athlete_id == athlete_id)
    q = q.order_by(Activity.start_date.desc().nulls_last(), Activity.id.desc())
    if limit is not None:
        q = q.limit(limit)
    return [ActivityRecord.model_validate(a) for a in q.all()]

def load_roster(db: Session) -> list[tuple[AthleteRecord, list[ActivityRecord]]]:
    athletes = list_athletes(db)
    by_athlete: dict = {a.id: [] for a in athletes}
    for act in load_activities(db):
        by_athlete.setdefault(act.athlete_id, []).append(act)
    return [(a, by_athlete[a.id]) for a in athletes]

def select_competition(configs: Sequence[CompetitionConfig], now: datetime) -> CompetitionConfig | None:
    """
    The config whose window holds ``now``; with overlaps, the narrowest window
    wins and then the later start. Otherwise the next upcoming config, then the
    most recent one.
    """
    if not configs:
        return None
    now = as_utc(now)
    ordered = sorted(configs, key=lambda c: as_utc(c.start_date))

    current = [c for c in ordered if as_utc(c.start_date) <= now <= as_utc(c.end_date)]
    if current:
        return min(
            current,
            key=lambda c: (as_utc(c.end_date) - as_utc(c.start_date), -as_utc(c.start_date).timestamp()),
        )

    for c in ordered:
        if now < as_utc(c.start_date):
            logger.info("no competition running, using upcoming %r", c.name)
            return c

    logger.info("all competitions finished, using %r", ordered[-1].name)
    return ordered[-1]

def resolve_competition(db: Session, now: datetime) -> CompetitionConfig:
    config = select_competition(db.query(CompetitionConfig).all(), now)
    if config is None:
        raise NotFoundError("competition config not found")
    return config

def toggle_pace_exclusion(db: Session, activity_id: int) -> bool:
    activity = db.get(Activity, activity_id)
    if activity is None:
        raise NotFoundError(f"activity {activity_id} not found")
    activity.exclude_from_pace_analysis = not activity.exclude_from_pace_analysis
    db.add(activity)
    db.commit()
    return activity.exclude_from_pace_analysis
