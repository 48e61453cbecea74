from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from yt_pulse.config import DEFAULT_REGION, PAGE_SIZE
from yt_pulse.exceptions import FetchError
from yt_pulse.models import EnrichedVideo
from yt_pulse.services.dates import date_range_bounds
from yt_pulse.services.enrichment import enrich, lookup_audiences
from yt_pulse.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)


class FetchService:
    """
    ids -> video details -> channel lookup (degradable) -> enriched collection.
    """

    def __init__(self, yt: Optional[YouTubeClient]) -> None:
        self._yt = yt

    def trending(self, region_code: str = DEFAULT_REGION) -> List[EnrichedVideo]:
        yt = self._client()
        ids = yt.trending_video_ids(region_code=region_code, max_results=PAGE_SIZE)
        logger.info("trending(%s): %d ids", region_code, len(ids))
        return self._enrich_ids(yt, ids)

    def search(
        self,
        query: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[EnrichedVideo]:
        query = (query or "").strip()
        if not query:
            # no keyword -> trending page
            return self.trending()

        yt = self._client()
        after, before = date_range_bounds(start_date, end_date)
        ids = yt.search_video_ids(
            query=query,
            published_after=after,
            published_before=before,
            max_results=PAGE_SIZE,
        )
        logger.info("search(%r, %s..%s): %d ids", query, after, before, len(ids))
        return self._enrich_ids(yt, ids)

    def _client(self) -> YouTubeClient:
        if self._yt is None:
            raise FetchError("YouTube API key is required")
        return self._yt

    @staticmethod
    def _enrich_ids(yt: YouTubeClient, ids: List[str]) -> List[EnrichedVideo]:
        if not ids:
            return []

        videos = yt.fetch_videos(ids)
        lookup = lookup_audiences(yt.fetch_channel_audiences, videos)
        if lookup.degraded:
            logger.warning("Channel statistics unavailable; %d videos graded without audience data", len(videos))
        return enrich(videos, lookup)
