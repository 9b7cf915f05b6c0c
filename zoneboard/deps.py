from datetime import datetime, timezone

from fastapi import Header, HTTPException, Query, status

from .config import settings

def require_admin(authorization: str | None = Header(None)):
    if authorization != f"Bearer {settings.ADMIN_TOKEN}":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

def get_now() -> datetime:
    """Request clock; tests override this dependency to pin 'now'."""
    return datetime.now(timezone.utc)

def athlete_pair(athletes: str = Query(..., description="two athlete ids, comma separated")) -> tuple[int, int]:
    parts = [p.strip() for p in athletes.split(",") if p.strip()]
    if len(parts) != 2:
        raise HTTPException(status_code=400, detail="Please provide exactly 2 athlete IDs")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise HTTPException(status_code=400, detail="athlete IDs must be integers")
