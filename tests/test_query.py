"""Tests for the collection query pipeline (filtering, ranker, query)."""

from __future__ import annotations

from yt_pulse.models import (
    GOOD,
    NEEDS_IMPROVEMENT,
    SORT_KEYS,
    EnrichedVideo,
    QueryState,
    SortConfig,
    VideoRecord,
)
from yt_pulse.services.query import count_grades, query_videos
from yt_pulse.services.ranker import published_millis


def _make(
    video_id: str,
    *,
    title: str = "",
    channel: str = "Channel",
    views: int = 0,
    likes: int = 0,
    subs: int = 0,
    published_at: str = "2025-01-01T00:00:00Z",
) -> EnrichedVideo:
    rec = VideoRecord(
        video_id=video_id,
        title=title or f"Video {video_id}",
        channel_id=f"UC-{channel}",
        channel_title=channel,
        published_at=published_at,
        view_count=views,
        like_count=likes,
    )
    return EnrichedVideo(video=rec, subscriber_count=subs)


def _ids(videos) -> list:
    return [v.video_id for v in videos]


V1 = _make("v1", title="Camping Tips", channel="Outdoors", views=1000, subs=10000, published_at="2025-01-02T00:00:00Z")
V2 = _make("v2", title="Tech Review", channel="Gadgets", views=50, subs=1000, published_at="2025-01-03T00:00:00Z")


# ---------------------------------------------------------------------------
# End-to-end two-video scenario
# ---------------------------------------------------------------------------

class TestScenario:
    def test_grades(self) -> None:
        assert V1.grade == GOOD
        assert V2.grade == NEEDS_IMPROVEMENT

    def test_filter_good(self) -> None:
        out = query_videos([V1, V2], QueryState(grade_filter=GOOD))
        assert _ids(out) == ["v1"]

    def test_sort_views_desc(self) -> None:
        out = query_videos([V2, V1], QueryState(sort=SortConfig("views", "desc")))
        assert _ids(out) == ["v1", "v2"]

    def test_default_sort_is_newest_first(self) -> None:
        out = query_videos([V1, V2], QueryState())
        assert _ids(out) == ["v2", "v1"]


# ---------------------------------------------------------------------------
# Search stage
# ---------------------------------------------------------------------------

class TestSearch:
    def test_empty_search_keeps_everything(self) -> None:
        c = [V1, V2]
        assert len(query_videos(c, QueryState(search="", grade_filter="all"))) == len(c)

    def test_case_insensitive_title(self) -> None:
        assert _ids(query_videos([V1, V2], QueryState(search="cAMPing"))) == ["v1"]

    def test_matches_channel_name(self) -> None:
        assert _ids(query_videos([V1, V2], QueryState(search="gadg"))) == ["v2"]

    def test_no_match_is_empty(self) -> None:
        assert query_videos([V1, V2], QueryState(search="zzz-nothing")) == []

    def test_search_applies_before_grade(self) -> None:
        out = query_videos([V1, V2], QueryState(search="tech", grade_filter=GOOD))
        assert out == []


# ---------------------------------------------------------------------------
# Sort stage
# ---------------------------------------------------------------------------

class TestSort:
    def test_views_desc_is_non_increasing(self) -> None:
        c = [_make(str(i), views=v) for i, v in enumerate([5, 100, 5, 0, 42, 100])]
        out = query_videos(c, QueryState(sort=SortConfig("views", "desc")))
        for a, b in zip(out, out[1:]):
            assert a.view_count >= b.view_count

    def test_ties_keep_input_order_both_directions(self) -> None:
        c = [_make("a", views=1), _make("b", views=1), _make("c", views=1)]
        assert _ids(query_videos(c, QueryState(sort=SortConfig("views", "desc")))) == ["a", "b", "c"]
        assert _ids(query_videos(c, QueryState(sort=SortConfig("views", "asc")))) == ["a", "b", "c"]

    def test_subscribers_asc(self) -> None:
        c = [_make("a", subs=30), _make("b", subs=0), _make("c", subs=10)]
        assert _ids(query_videos(c, QueryState(sort=SortConfig("subscribers", "asc")))) == ["b", "c", "a"]

    def test_vs_ratio_uses_floored_denominator(self) -> None:
        c = [_make("a", views=10, subs=100), _make("b", views=3, subs=0)]
        assert _ids(query_videos(c, QueryState(sort=SortConfig("vsRatio", "desc")))) == ["b", "a"]

    def test_lv_ratio(self) -> None:
        c = [_make("a", views=100, likes=1), _make("b", views=100, likes=10), _make("c", views=0, likes=0)]
        assert _ids(query_videos(c, QueryState(sort=SortConfig("lvRatio", "desc")))) == ["b", "a", "c"]

    def test_published_at_asc(self) -> None:
        c = [
            _make("new", published_at="2025-03-01T00:00:00Z"),
            _make("old", published_at="2024-03-01T00:00:00Z"),
        ]
        assert _ids(query_videos(c, QueryState(sort=SortConfig("publishedAt", "asc")))) == ["old", "new"]

    def test_no_sort_keeps_filtered_order(self) -> None:
        c = [_make("b", views=1), _make("a", views=9)]
        assert _ids(query_videos(c, QueryState(sort=None))) == ["b", "a"]

    def test_unknown_key_keeps_filtered_order(self) -> None:
        c = [_make("b", views=1), _make("a", views=9)]
        assert _ids(query_videos(c, QueryState(sort=SortConfig("duration", "desc")))) == ["b", "a"]

    def test_published_millis(self) -> None:
        assert published_millis("1970-01-01T00:00:01Z") == 1000
        assert published_millis("garbage") == 0

    def test_published_millis_fractional_seconds(self) -> None:
        assert published_millis("1970-01-01T00:00:01.5Z") == 1500

    def test_every_listed_sort_key_reorders(self) -> None:
        low = _make("low", views=1, likes=0, subs=1, published_at="2025-01-01T00:00:00Z")
        high = _make("high", views=900, likes=90, subs=100, published_at="2025-02-01T00:00:00Z")
        for key in SORT_KEYS:
            out = query_videos([low, high], QueryState(sort=SortConfig(key, "desc")))
            assert _ids(out) == ["high", "low"], key


class TestIdempotence:
    def test_same_inputs_same_output(self) -> None:
        c = [_make(str(i), views=i % 3, subs=i) for i in range(12)]
        q = QueryState(search="video", sort=SortConfig("views", "desc"))
        assert query_videos(c, q) == query_videos(c, q)

    def test_input_not_mutated(self) -> None:
        c = [V2, V1]
        query_videos(c, QueryState(sort=SortConfig("views", "desc")))
        assert c == [V2, V1]


# ---------------------------------------------------------------------------
# Sort toggling and grade counts
# ---------------------------------------------------------------------------

class TestSortToggle:
    def test_same_key_flips_to_asc(self) -> None:
        assert SortConfig("views", "desc").toggled("views") == SortConfig("views", "asc")

    def test_same_key_asc_goes_back_to_desc(self) -> None:
        assert SortConfig("views", "asc").toggled("views") == SortConfig("views", "desc")

    def test_new_key_resets_to_desc(self) -> None:
        assert SortConfig("views", "asc").toggled("subscribers") == SortConfig("subscribers", "desc")


class TestCountGrades:
    def test_counts(self) -> None:
        c = [V1, V2, _make("x", views=10, subs=1)]
        counts = count_grades(c)
        assert counts.total == 3
        assert (counts.excellent, counts.good, counts.needs_improvement) == (1, 1, 1)
        assert counts.as_dict()["all"] == 3
