import logging
from datetime import datetime

import httpx
from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from . import models, store
from .bests import personal_bests
from .breakdown import athlete_summary, flatten_activities
from .compare import compare_athletes
from .config import settings
from .db import engine, get_session
from .deps import athlete_pair, get_now, require_admin
from .errors import NotFoundError, ZoneboardError
from .export import export_csv
from .history import activity_calendar, weekly_history
from .ingest import sync_athlete
from .models import Athlete
from .pace import pace_analysis
from .points import leaderboard, weekly_leaderboard
from .projection import competition_progress
from .records import competition_view, flatten_activity, full_history
from .strava import exchange_code, get_athlete_zones
from .webhook import router as webhook_router

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Zoneboard API")
app.include_router(webhook_router)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

@app.exception_handler(ZoneboardError)
async def zoneboard_error_handler(request: Request, exc: ZoneboardError):
    if not isinstance(exc, NotFoundError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.get("/health")
async def health():
    return {"status": "ok"}

@app.get("/leaderboard")
def get_leaderboard(db: Session = Depends(get_session)):
    rows = leaderboard(store.list_athletes(db), store.load_activities(db))
    return {"data": rows, "count": len(rows)}

@app.get("/weekly-stats")
def get_weekly_stats(db: Session = Depends(get_session), now: datetime = Depends(get_now)):
    return {"data": weekly_leaderboard(store.list_athletes(db), store.load_activities(db), now)}

@app.get("/recent-activities")
def get_recent_activities(db: Session = Depends(get_session)):
    profiles = {a.id: a for a in store.list_athletes(db)}
    recent = competition_view(store.load_activities(db))[: settings.RECENT_ACTIVITY_LIMIT]
    out = []
    for act in recent:
        athlete = profiles.get(act.athlete_id)
        out.append({
            **flatten_activity(act),
            "firstname": (athlete.firstname if athlete else None) or "",
            "lastname": (athlete.lastname if athlete else None) or "",
            "profile_image_url": athlete.profile_image_url if athlete else None,
        })
    return {"data": out, "count": len(out)}

@app.get("/athlete/{athlete_id}")
def get_athlete(athlete_id: int, db: Session = Depends(get_session)):
    athlete = store.get_athlete(db, athlete_id)
    activities = competition_view(store.load_activities(db, athlete_id))
    return {"data": athlete_summary(athlete, activities)}

@app.get("/athlete/{athlete_id}/weekly-history")
def get_weekly_history(
    athlete_id: int,
    db: Session = Depends(get_session),
    now: datetime = Depends(get_now),
):
    store.get_athlete(db, athlete_id)
    config = store.resolve_competition(db, now)
    activities = competition_view(store.load_activities(db, athlete_id))
    return {"data": weekly_history(activities, config.start_date, now)}

@app.get("/athlete/{athlete_id}/activity-calendar")
def get_activity_calendar(
    athlete_id: int,
    db: Session = Depends(get_session),
    now: datetime = Depends(get_now),
):
    store.get_athlete(db, athlete_id)
    activities = full_history(store.load_activities(db, athlete_id))
    return {"data": activity_calendar(activities, now)}

@app.get("/athlete/{athlete_id}/export")
def export_athlete(athlete_id: int, db: Session = Depends(get_session)):
    athlete = store.get_athlete(db, athlete_id)
    activities = full_history(store.load_activities(db, athlete_id))
    return {
        "data": {
            "athlete": {"firstname": athlete.firstname, "lastname": athlete.lastname},
            "activities": flatten_activities(activities),
            "total_count": len(activities),
        }
    }

@app.get("/athlete/{athlete_id}/pace-analysis")
def get_pace_analysis(athlete_id: int, db: Session = Depends(get_session)):
    store.get_athlete(db, athlete_id)
    return {"data": pace_analysis(store.load_activities(db, athlete_id))}

@app.get("/athlete/{athlete_id}/personal-bests")
def get_personal_bests(
    athlete_id: int,
    db: Session = Depends(get_session),
    now: datetime = Depends(get_now),
):
    store.get_athlete(db, athlete_id)
    return {"data": personal_bests(store.load_activities(db, athlete_id), now)}

@app.get("/export-all")
def export_all(db: Session = Depends(get_session), now: datetime = Depends(get_now)):
    csv_text = export_csv(store.list_athletes(db), full_history(store.load_activities(db)))
    filename = f"zoneboard-export-{now.date().isoformat()}.csv"
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@app.get("/compare")
def compare(ids: tuple[int, int] = Depends(athlete_pair), db: Session = Depends(get_session)):
    id1, id2 = ids
    athlete1 = store.get_athlete(db, id1)
    athlete2 = store.get_athlete(db, id2)
    return {"data": compare_athletes(
        athlete1, competition_view(store.load_activities(db, id1)),
        athlete2, competition_view(store.load_activities(db, id2)),
    )}

@app.get("/competition-progress")
def get_competition_progress(db: Session = Depends(get_session), now: datetime = Depends(get_now)):
    config = store.resolve_competition(db, now)
    return {"data": competition_progress(config, store.load_roster(db), now)}

@app.post("/activity/{activity_id}/toggle-pace-exclusion")
def toggle_pace_exclusion(activity_id: int, db: Session = Depends(get_session)):
    return {"exclude_from_pace_analysis": store.toggle_pace_exclusion(db, activity_id)}

@app.get("/auth/strava/start")
async def auth_start():
    scopes = "read,activity:read_all,profile:read_all"
    url = (
        "https://www.strava.com/oauth/authorize?"
        f"client_id={settings.STRAVA_CLIENT_ID}&response_type=code&redirect_uri={settings.STRAVA_REDIRECT_URI}"
        f"&approval_prompt=auto&scope={scopes}"
    )
    return RedirectResponse(url)

@app.get("/auth/strava/callback")
async def auth_cb(code: str, state: str | None = None, db: Session = Depends(get_session)):
    token = await exchange_code(code)
    profile = token["athlete"]
    athlete = db.query(Athlete).filter_by(strava_athlete_id=profile["id"]).first()
    if not athlete:
        athlete = Athlete(strava_athlete_id=profile["id"])
    athlete.firstname = (profile.get("firstname") or "").strip() or None
    athlete.lastname = (profile.get("lastname") or "").strip() or None
    athlete.profile_image_url = profile.get("profile")
    athlete.strava_access_token = token["access_token"]
    athlete.strava_refresh_token = token["refresh_token"]
    athlete.strava_token_expires_at = token["expires_at"]
    try:
        athlete.hr_zones = await get_athlete_zones(athlete.strava_access_token)
    except httpx.HTTPStatusError as e:
        # zone config needs profile:read_all; %-of-max-HR zones cover the rest
        logger.warning("could not read HR zones for Strava athlete %s: %s", profile["id"], e)

    db.add(athlete)
    db.commit()
    return {"ok": True, "message": "Strava connected", "athlete_id": athlete.id}

@app.post("/admin/sync/{athlete_id}")
async def admin_sync(
    athlete_id: int,
    _: None = Depends(require_admin),
    db: Session = Depends(get_session),
    now: datetime = Depends(get_now),
):
    athlete = db.get(Athlete, athlete_id)
    if athlete is None:
        raise NotFoundError(f"athlete {athlete_id} not found")
    if not athlete.strava_access_token:
        raise HTTPException(401, "athlete has no Strava token; reconnect with Strava")
    result = await sync_athlete(db, athlete, now)
    return {"ok": True, **result}

