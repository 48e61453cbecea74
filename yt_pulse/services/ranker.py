from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from yt_pulse.models import ASC, DESC, EnrichedVideo, SortConfig


def published_millis(published_at: str) -> int:
    # publishedAt is ISO like "2025-01-20T12:34:56Z"
    try:
        dt = datetime.fromisoformat((published_at or "").replace("Z", "+00:00"))
    except ValueError:
        return 0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


class Ranker:
    """
    Single-key sorting. Ties keep their incoming order (no secondary key).
    """

    _KEYS: Dict[str, Callable[[EnrichedVideo], float]] = {
        "publishedAt": lambda v: published_millis(v.published_at),
        "subscribers": lambda v: v.subscriber_count,
        "views": lambda v: v.view_count,
        "vsRatio": lambda v: v.vs_ratio,
        "lvRatio": lambda v: v.lv_ratio,
    }

    def sort(self, videos: List[EnrichedVideo], sort: Optional[SortConfig]) -> List[EnrichedVideo]:
        if sort is None:
            return list(videos)

        key = (sort.key or "").strip()
        if key not in self._KEYS:
            return list(videos)

        direction = (sort.direction or DESC).strip().lower()
        # sorted() stays stable with reverse=True
        return sorted(videos, key=self._KEYS[key], reverse=direction != ASC)
