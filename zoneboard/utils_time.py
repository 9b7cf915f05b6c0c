from datetime import datetime, date, time, timedelta, timezone

DAY = timedelta(days=1)

def as_utc(dt: datetime) -> datetime:
    # sqlite hands back naive datetimes; they were stored as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def day_of(dt: datetime) -> date:
    return as_utc(dt).date()

def week_start(d: date) -> date:
    # weeks run Sunday..Saturday; isoweekday() is 7 on Sunday
    return d - timedelta(days=d.isoweekday() % 7)

def week_key(dt: datetime) -> str:
    return week_start(day_of(dt)).isoformat()

def week_window(now: datetime):
    start_day = week_start(day_of(now))
    start = datetime.combine(start_day, time(0, 0), tzinfo=timezone.utc)
    return start, start + 7 * DAY

def parse_iso(raw: str) -> datetime:
    # Strava returns ISO8601 with a trailing Z
    return as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
