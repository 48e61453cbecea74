from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from yt_pulse.models import EnrichedVideo, GradeCounts, TrendAnalysis


def video_to_dict(v: EnrichedVideo) -> Dict[str, Any]:
    rec = v.video
    return {
        "video_id": rec.video_id,
        "title": rec.title,
        "channel_id": rec.channel_id,
        "channel_title": rec.channel_title,
        "published_at": rec.published_at,
        "category_id": rec.category_id,
        "tags": list(rec.tags),
        "view_count": rec.view_count,
        "like_count": rec.like_count,
        "comment_count": rec.comment_count,
        "subscriber_count": v.subscriber_count,
        "vs_ratio": round(v.vs_ratio, 4),
        "lv_ratio": round(v.lv_ratio, 4),
        "grade": v.grade,
        "thumbnail": rec.thumbnail_medium,
        "url": rec.url,
    }


def analysis_to_dict(a: TrendAnalysis) -> Dict[str, Any]:
    return {
        "summary": a.summary,
        "keyThemes": [{"theme": t.theme, "explanation": t.explanation} for t in a.key_themes],
        "audienceInsights": a.audience_insights,
        "prediction": a.prediction,
    }


class JsonPrinter:
    def print(
        self,
        videos: List[EnrichedVideo],
        counts: Optional[GradeCounts] = None,
        analysis: Optional[TrendAnalysis] = None,
    ) -> None:
        payload: Dict[str, Any] = {"videos": [video_to_dict(v) for v in videos]}
        if counts is not None:
            payload["grade_counts"] = counts.as_dict()
        if analysis is not None:
            payload["analysis"] = analysis_to_dict(analysis)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
