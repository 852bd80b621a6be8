from datetime import datetime
from typing import Any

def parse_timestamp(value: Any) -> datetime | None:
    """Backends hand back ISO-8601 strings; tolerate datetimes and junk."""
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None

def format_timestamp(value: Any, fmt: str = "%b %d, %Y %H:%M") -> str:
    dt = parse_timestamp(value)
    if dt is None:
        return str(value or "")
    return dt.strftime(fmt)
