from __future__ import annotations
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, TypeVar
import re

T = TypeVar("T")

ISO_UTC_Z_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")

def capitalize_first(s: str) -> str:
    """Upper-case the first character only; the rest is left as-is."""
    return s[:1].upper() + s[1:]

def first_of(candidates: Iterable[Callable[[], Optional[T]]]) -> Optional[T]:
    """Evaluate candidate producers in order; return the first non-None value."""
    for candidate in candidates:
        value = candidate()
        if value is not None:
            return value
    return None

def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Format a moment (default: now) as ISO8601 UTC with 'Z', second precision."""
    dt = now or datetime.now(tz=timezone.utc)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")

def validate_iso8601_utc(z: Optional[str]) -> bool:
    """True iff string is YYYY-MM-DDTHH:MM:SSZ."""
    if z is None:
        return False
    return bool(ISO_UTC_Z_RE.match(z))
