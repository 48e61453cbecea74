from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

from yt_pulse.config import DEFAULT_LOOKBACK_DAYS

_RFC3339 = "%Y-%m-%dT%H:%M:%SZ"


def parse_date(s: str) -> Optional[date]:
    """'YYYY-MM-DD' -> date; blank -> None. Raises ValueError on junk."""
    s = (s or "").strip()
    if not s:
        return None
    return date.fromisoformat(s)


def default_date_range(today: Optional[date] = None) -> Tuple[date, date]:
    end = today or date.today()
    return end - timedelta(days=DEFAULT_LOOKBACK_DAYS), end


def date_range_bounds(start: Optional[date], end: Optional[date]) -> Tuple[Optional[str], Optional[str]]:
    """
    Inclusive calendar range -> RFC 3339 instants for search.list.
    Start is UTC midnight, end is 23:59:59 local; both rendered in UTC.
    """
    after = datetime.combine(start, time.min, tzinfo=timezone.utc).strftime(_RFC3339) if start else None
    before = _to_rfc3339(datetime.combine(end, time(23, 59, 59))) if end else None
    return after, before


def _to_rfc3339(local_naive: datetime) -> str:
    # astimezone() on a naive datetime treats it as local time
    utc = local_naive.astimezone(timezone.utc)
    return utc.strftime(_RFC3339)
