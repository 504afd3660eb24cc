from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Timezone-aware current time in UTC (used to stamp location fixes)."""
    return datetime.now(timezone.utc)


def format_utc_datetime(dt: Optional[datetime]) -> Optional[str]:
    """
    Render a datetime as ISO 8601 in UTC with a 'Z' suffix.

    Naive datetimes are treated as UTC; aware ones are converted.
    """
    if dt is None:
        return None

    dt = dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")
