import httpx
from .config import settings

BASE = "https://www.strava.com/api/v3"
OAUTH_TOKEN_URL = "https://www.strava.com/oauth/token"

def _auth(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}

async def exchange_code(code: str):
    async with httpx.AsyncClient(timeout=30) as c:
        r = await c.post(OAUTH_TOKEN_URL, data={
            "client_id": settings.STRAVA_CLIENT_ID,
            "client_secret": settings.STRAVA_CLIENT_SECRET,
            "code": code,
            "grant_type": "authorization_code",
        })
        r.raise_for_status()
        return r.json()

async def refresh_token(refresh_token: str):
    async with httpx.AsyncClient(timeout=30) as c:
        r = await c.post(OAUTH_TOKEN_URL, data={
            "client_id": settings.STRAVA_CLIENT_ID,
            "client_secret": settings.STRAVA_CLIENT_SECRET,
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        })
        r.raise_for_status()
        return r.json()

async def get_activity(access_token: str, activity_id: int):
    async with httpx.AsyncClient(timeout=30) as c:
        r = await c.get(f"{BASE}/activities/{activity_id}", headers=_auth(access_token))
        r.raise_for_status()
        return r.json()

async def get_hr_streams(access_token: str, activity_id: int):
    """Heart rate and time streams keyed by type; {} when the activity has none."""
    async with httpx.AsyncClient(timeout=30) as c:
        r = await c.get(
            f"{BASE}/activities/{activity_id}/streams",
            headers=_auth(access_token),
            params={"keys": "heartrate,time", "key_by_type": "true"},
        )
        if r.status_code == 404:
            return {}
        r.raise_for_status()
        return r.json()

async def list_activities(access_token: str, after_ts: int, per_page: int = 200):
    async with httpx.AsyncClient(timeout=30) as client:
        r = await client.get(
            f"{BASE}/athlete/activities",
            headers=_auth(access_token),
            params={"after": after_ts, "per_page": per_page},
        )
        r.raise_for_status()
        return r.json()

async def get_athlete_zones(access_token: str):
    async with httpx.AsyncClient(timeout=20) as client:
        r = await client.get(f"{BASE}/athlete/zones", headers=_auth(access_token))
        r.raise_for_status()
        return r.json()
