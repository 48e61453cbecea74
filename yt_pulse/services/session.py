from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from yt_pulse.exceptions import YtPulseError
from yt_pulse.models import EnrichedVideo, GradeCounts, QueryState, SortConfig
from yt_pulse.services.query import count_grades, query_videos

logger = logging.getLogger(__name__)


class FeedSession:
    """
    Owns the working collection and the query state.

    Fetches may overlap; the most recently *started* one wins. Results or
    errors carrying an older ticket are dropped. A failed fetch keeps the
    previous collection.
    """

    def __init__(self, query: Optional[QueryState] = None) -> None:
        self._videos: List[EnrichedVideo] = []
        self._query = query or QueryState()
        self._latest_ticket = 0
        self.error: Optional[str] = None
        self.loading = False

    @property
    def videos(self) -> List[EnrichedVideo]:
        return list(self._videos)

    @property
    def query(self) -> QueryState:
        return self._query

    # -----------------------------
    # Fetch lifecycle
    # -----------------------------
    def begin_fetch(self) -> int:
        self._latest_ticket += 1
        self.loading = True
        self.error = None
        return self._latest_ticket

    def complete_fetch(self, ticket: int, videos: Sequence[EnrichedVideo]) -> bool:
        if ticket != self._latest_ticket:
            logger.debug("Dropping superseded fetch result (ticket %d, latest %d)", ticket, self._latest_ticket)
            return False
        self._videos = list(videos)
        self.loading = False
        self.error = None
        return True

    def fail_fetch(self, ticket: int, message: str) -> bool:
        if ticket != self._latest_ticket:
            logger.debug("Dropping superseded fetch error (ticket %d): %s", ticket, message)
            return False
        self.loading = False
        self.error = message
        return True

    def run_fetch(self, fn: Callable[[], Sequence[EnrichedVideo]]) -> bool:
        """Synchronous convenience: begin, call fn, then complete or fail."""
        ticket = self.begin_fetch()
        try:
            videos = fn()
        except YtPulseError as e:
            return self.fail_fetch(ticket, str(e))
        return self.complete_fetch(ticket, videos)

    # -----------------------------
    # Query state
    # -----------------------------
    def set_search(self, text: str) -> None:
        self._query = replace(self._query, search=text or "")

    def set_grade_filter(self, grade_filter: str) -> None:
        self._query = replace(self._query, grade_filter=grade_filter)

    def toggle_sort(self, key: str) -> None:
        current = self._query.sort
        if current is None:
            new_sort = SortConfig(key=key)
        else:
            new_sort = current.toggled(key)
        self._query = replace(self._query, sort=new_sort)

    def set_query(self, query: QueryState) -> None:
        self._query = query

    # -----------------------------
    # Derived views
    # -----------------------------
    def visible(self) -> List[EnrichedVideo]:
        return query_videos(self._videos, self._query)

    def grade_counts(self) -> GradeCounts:
        return count_grades(self._videos)
