from __future__ import annotations

from typing import Iterable, List, Sequence

from yt_pulse.models import EXCELLENT, GOOD, NEEDS_IMPROVEMENT, EnrichedVideo, GradeCounts, QueryState
from yt_pulse.services.filtering import VideoFilter
from yt_pulse.services.ranker import Ranker

_FILTER = VideoFilter()
_RANKER = Ranker()


def query_videos(collection: Sequence[EnrichedVideo], state: QueryState) -> List[EnrichedVideo]:
    """
    search text -> grade filter -> sort, always in that order.
    Holds no state; call it again whenever the collection or the query changes.
    """
    filtered = _FILTER.apply(collection, search=state.search, grade_filter=state.grade_filter)
    return _RANKER.sort(filtered, state.sort)


def count_grades(videos: Iterable[EnrichedVideo]) -> GradeCounts:
    total = excellent = good = needs_improvement = 0
    for v in videos:
        total += 1
        g = v.grade
        if g == EXCELLENT:
            excellent += 1
        elif g == GOOD:
            good += 1
        elif g == NEEDS_IMPROVEMENT:
            needs_improvement += 1
    return GradeCounts(total=total, excellent=excellent, good=good, needs_improvement=needs_improvement)
