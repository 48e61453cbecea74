from __future__ import annotations

from typing import Iterable, List

from yt_pulse.models import FILTER_ALL, GRADES, EnrichedVideo


class VideoFilter:
    def apply(self, videos: Iterable[EnrichedVideo], search: str = "", grade_filter: str = FILTER_ALL) -> List[EnrichedVideo]:
        needle = (search or "").lower()
        grade = _normalize_grade(grade_filter)

        out: List[EnrichedVideo] = []
        for v in videos:
            if not _matches_search(v, needle):
                continue
            if grade != FILTER_ALL and v.grade != grade:
                continue
            out.append(v)

        return out


def _matches_search(v: EnrichedVideo, needle: str) -> bool:
    # empty needle matches everything
    if not needle:
        return True
    return needle in (v.title or "").lower() or needle in (v.channel_title or "").lower()


def _normalize_grade(grade_filter: str) -> str:
    g = (grade_filter or FILTER_ALL).strip().lower()
    if g == FILTER_ALL or g in GRADES:
        return g
    return FILTER_ALL
