from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Mapping, Optional, Tuple

from yt_pulse.services.classifier import (
    EXCELLENT,
    GOOD,
    GRADES,
    NEEDS_IMPROVEMENT,
    classify,
    view_sub_ratio,
)

FILTER_ALL = "all"

SORT_KEYS = ("publishedAt", "subscribers", "views", "vsRatio", "lvRatio")
ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class VideoRecord:
    video_id: str
    title: str
    channel_id: str
    channel_title: str
    published_at: str  # ISO string
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    description: str = ""
    thumbnail_high: str = ""
    thumbnail_medium: str = ""
    tags: Tuple[str, ...] = ()
    category_id: str = ""

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


@dataclass(frozen=True)
class ChannelAudience:
    channel_id: str
    subscriber_count: int = 0


@dataclass(frozen=True)
class AudienceLookup:
    """
    Result of the channel lookup step.
    degraded=True means the upstream call failed and every video gets audience 0.
    """

    audiences: Mapping[str, int] = field(default_factory=dict)
    degraded: bool = False


@dataclass(frozen=True)
class EnrichedVideo:
    video: VideoRecord
    subscriber_count: int = 0  # 0 means unknown or zero

    @property
    def video_id(self) -> str:
        return self.video.video_id

    @property
    def title(self) -> str:
        return self.video.title

    @property
    def channel_title(self) -> str:
        return self.video.channel_title

    @property
    def published_at(self) -> str:
        return self.video.published_at

    @property
    def view_count(self) -> int:
        return self.video.view_count

    @property
    def like_count(self) -> int:
        return self.video.like_count

    @property
    def url(self) -> str:
        return self.video.url

    @property
    def vs_ratio(self) -> float:
        return view_sub_ratio(self.view_count, self.subscriber_count)

    @property
    def lv_ratio(self) -> float:
        return self.like_count / max(self.view_count, 1)

    @property
    def grade(self) -> str:
        return classify(self.view_count, self.subscriber_count)


@dataclass(frozen=True)
class GradeCounts:
    total: int = 0
    excellent: int = 0
    good: int = 0
    needs_improvement: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            FILTER_ALL: self.total,
            EXCELLENT: self.excellent,
            GOOD: self.good,
            NEEDS_IMPROVEMENT: self.needs_improvement,
        }


@dataclass(frozen=True)
class SortConfig:
    key: str = "publishedAt"
    direction: str = DESC

    def toggled(self, key: str) -> "SortConfig":
        """Header-click semantics: same key flips desc -> asc, anything else starts at desc."""
        if key == self.key and self.direction == DESC:
            return SortConfig(key=key, direction=ASC)
        return SortConfig(key=key, direction=DESC)


@dataclass(frozen=True)
class QueryState:
    search: str = ""
    grade_filter: str = FILTER_ALL
    sort: Optional[SortConfig] = field(default_factory=SortConfig)
    # only used by the upstream fetch
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class KeyTheme:
    theme: str
    explanation: str


@dataclass(frozen=True)
class TrendAnalysis:
    summary: str
    key_themes: Tuple[KeyTheme, ...]
    audience_insights: str
    prediction: str
