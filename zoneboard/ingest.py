import logging
from datetime import datetime, timedelta, timezone

import httpx
from sqlalchemy.orm import Session

from .classify import classify_sport, is_excluded
from .config import settings
from .db import session_scope
from .errors import NotFoundError
from .models import Athlete, Activity, CompetitionConfig, HeartRateZones
from .store import resolve_competition
from .strava import get_activity, get_hr_streams, list_activities, refresh_token
from .utils_time import as_utc, parse_iso
from .zones import custom_zone_bounds, fallback_points, zone_points, zone_times

logger = logging.getLogger(__name__)

def in_competition_window(start_date: datetime | None, config: CompetitionConfig | None) -> bool:
    if config is None or start_date is None:
        return False
    return as_utc(config.start_date) <= as_utc(start_date) <= as_utc(config.end_date)

def current_config(db: Session, now: datetime) -> CompetitionConfig | None:
    try:
        return resolve_competition(db, now)
    except NotFoundError:
        logger.warning("no competition config; activities will be stored outside the window")
        return None

async def refresh_athlete_token(db: Session, athlete: Athlete):
    new = await refresh_token(athlete.strava_refresh_token)
    athlete.strava_access_token = new["access_token"]
    athlete.strava_refresh_token = new.get("refresh_token", athlete.strava_refresh_token)
    athlete.strava_token_expires_at = new.get("expires_at", athlete.strava_token_expires_at)
    db.add(athlete); db.commit()

async def with_fresh_token(db: Session, athlete: Athlete, call, *args):
    """Run a Strava call, refreshing the athlete's token once on a 401."""
    try:
        return await call(athlete.strava_access_token, *args)
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 401 and athlete.strava_refresh_token:
            logger.info("refreshing Strava token for athlete %s", athlete.id)
            await refresh_athlete_token(db, athlete)
            return await call(athlete.strava_access_token, *args)
        raise

async def store_activity(db: Session, athlete: Athlete, data: dict, config: CompetitionConfig | None):
    """Upsert one Strava activity with its HR zone times and zone points."""
    sport = classify_sport(data.get("sport_type") or data.get("type"), data.get("total_elevation_gain"))

    a = db.query(Activity).filter_by(strava_activity_id=data["id"]).first()
    if not a:
        a = Activity(strava_activity_id=data["id"], athlete_id=athlete.id)

    raw_start = data.get("start_date")
    a.start_date = parse_iso(raw_start) if raw_start else None
    a.name = data.get("name")
    a.sport_type = sport
    a.distance_m = float(data.get("distance") or 0)
    a.moving_time_s = int(data.get("moving_time") or 0)
    a.average_heartrate = data.get("average_heartrate")
    a.max_heartrate = data.get("max_heartrate")
    a.average_speed_mps = data.get("average_speed")
    a.total_elevation_gain_m = data.get("total_elevation_gain")
    a.in_competition_window = in_competition_window(a.start_date, config)

    has_hr = a.average_heartrate is not None or a.max_heartrate is not None
    points = fallback_points(sport, a.moving_time_s, has_hr)
    a.zone_points = points or 0
    db.add(a)
    db.flush()

    streams = await with_fresh_token(db, athlete, get_hr_streams, data["id"])
    hr = (streams.get("heartrate") or {}).get("data")
    t = (streams.get("time") or {}).get("data")
    if hr and t:
        seconds = zone_times(hr, t, zones=custom_zone_bounds(athlete.hr_zones), max_hr=a.max_heartrate)
        row = a.heart_rate_zones[0] if a.heart_rate_zones else HeartRateZones(activity=a)
        (row.zone_1_time_s, row.zone_2_time_s, row.zone_3_time_s,
         row.zone_4_time_s, row.zone_5_time_s) = (int(s) for s in seconds)
        db.add(row)
        if points is None:
            a.zone_points = zone_points(seconds)

    db.commit()
    return a

async def handle_strava_event(payload: dict):
    if payload.get("object_type") != "activity":
        return
    activity_id = int(payload["object_id"])
    owner_id = int(payload["owner_id"])  # strava athlete id

    with session_scope() as db:
        if payload.get("aspect_type") == "delete":
            a = db.query(Activity).filter_by(strava_activity_id=activity_id).first()
            if a:
                db.delete(a)
                db.commit()
            return

        athlete = db.query(Athlete).filter_by(strava_athlete_id=owner_id).first()
        if not athlete or not athlete.strava_access_token:
            logger.warning("no token for Strava athlete %s, skipping activity %s", owner_id, activity_id)
            return

        data = await with_fresh_token(db, athlete, get_activity, activity_id)
        sport = data.get("sport_type") or data.get("type")
        if is_excluded(sport):
            logger.info("skipping activity %s: excluded sport %s", activity_id, sport)
            return

        await store_activity(db, athlete, data, current_config(db, datetime.now(timezone.utc)))

async def sync_athlete(db: Session, athlete: Athlete, now: datetime) -> dict:
    """Pull the athlete's activities since the competition started and store them."""
    config = current_config(db, now)
    now = as_utc(now)
    if config is not None and as_utc(config.start_date) <= now:
        after = as_utc(config.start_date)
    else:
        after = now - timedelta(days=settings.SYNC_LOOKBACK_DAYS)

    acts = await with_fresh_token(db, athlete, list_activities, int(after.timestamp()))

    synced = errors = skipped = 0
    for data in acts:
        if is_excluded(data.get("sport_type") or data.get("type")):
            skipped += 1
            continue
        try:
            await store_activity(db, athlete, data, config)
            synced += 1
        except httpx.HTTPError as e:
            db.rollback()
            logger.error("failed to sync activity %s: %s", data.get("id"), e)
            errors += 1

    return {"synced": synced, "skipped": skipped, "errors": errors}
