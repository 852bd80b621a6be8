import math
import re

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

RATING_MIN = 1
RATING_MAX = 5
RATING_DEFAULT = 5

def clean_str(val: str | None, max_len: int = 255) -> str | None:
    """Single-line field: whitespace runs collapsed, trimmed, cut at max_len. Blank becomes None."""
    if val is None:
        return None
    s = re.sub(r"\s+", " ", val).strip()
    if not s:
        return None
    return s[:max_len]

def clean_text(val: str | None, max_len: int = 5000) -> str:
    """Trim free-text answers but keep their line breaks. Never returns None."""
    if not val:
        return ""
    return val.strip()[:max_len]

def is_valid_email(val: str | None) -> bool:
    if not val:
        return True
    return bool(_EMAIL_RE.match(val))

def clamp_rating(raw) -> int:
    """
    Always-valid rating: non-numeric or blank input falls back to the default,
    numbers are rounded and snapped into [RATING_MIN, RATING_MAX].
    """
    if isinstance(raw, bool) or raw is None:
        return RATING_DEFAULT
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return RATING_DEFAULT
    if math.isnan(value):
        return RATING_DEFAULT
    if value < RATING_MIN:
        return RATING_MIN
    if value > RATING_MAX:
        return RATING_MAX
    return int(round(value))
