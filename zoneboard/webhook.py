import logging

from fastapi import APIRouter, HTTPException, Query
from .config import settings
from .ingest import handle_strava_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/strava/webhook", tags=["strava"])

@router.get("")
async def verify_subscription(
    mode: str | None = Query(None, alias="hub.mode"),
    challenge: str | None = Query(None, alias="hub.challenge"),
    verify_token: str | None = Query(None, alias="hub.verify_token"),
):
    if mode != "subscribe" or verify_token != settings.STRAVA_VERIFY_TOKEN:
        raise HTTPException(status_code=403, detail="Forbidden")
    # Strava expects this exact key back
    return {"hub.challenge": challenge}

@router.post("")
async def receive_event(event: dict):
    # {object_type, object_id, aspect_type, updates, owner_id, subscription_id, event_time}
    logger.info(
        "strava event %s %s %s",
        event.get("aspect_type"), event.get("object_type"), event.get("object_id"),
    )
    await handle_strava_event(event)
    return {"received": True}
