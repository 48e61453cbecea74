from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from yt_pulse.config import DEFAULT_REGION, PAGE_SIZE
from yt_pulse.exceptions import FetchError
from yt_pulse.models import ChannelAudience, VideoRecord
from yt_pulse.services.coercion import safe_int

logger = logging.getLogger(__name__)


class YouTubeClient:
    """
    Thin wrapper around YouTube Data API v3 calls.
    Responsibilities:
      - trending / keyword search for video IDs (single page)
      - fetch video snippet + stats in batches
      - fetch channel subscriber counts in batches
    Every API failure leaves here as FetchError.
    """

    def __init__(self, api_key: str, service: Any = None) -> None:
        self._service = service or build("youtube", "v3", developerKey=api_key, cache_discovery=False)

    def trending_video_ids(self, region_code: str = DEFAULT_REGION, max_results: int = PAGE_SIZE) -> List[str]:
        req = self._service.videos().list(
            part="id",
            chart="mostPopular",
            regionCode=region_code,
            maxResults=_clamp_page(max_results),
        )
        resp = self._execute(req, "Failed to load trending videos.")
        return _dedupe([item.get("id") for item in resp.get("items", [])])

    def search_video_ids(
        self,
        query: str,
        published_after: Optional[str] = None,
        published_before: Optional[str] = None,
        max_results: int = PAGE_SIZE,
    ) -> List[str]:
        params: Dict[str, Any] = {
            "part": "id",
            "q": query,
            "type": "video",
            "maxResults": _clamp_page(max_results),
        }
        if published_after:
            params["publishedAfter"] = published_after
        if published_before:
            params["publishedBefore"] = published_before

        resp = self._execute(self._service.search().list(**params), "YouTube search failed.")
        ids = [(item.get("id") or {}).get("videoId") for item in resp.get("items", [])]
        return _dedupe(ids)

    def fetch_videos(self, video_ids: Iterable[str]) -> List[VideoRecord]:
        vids = list(video_ids)
        if not vids:
            return []

        videos: List[VideoRecord] = []

        # videos.list accepts up to 50 IDs per request
        for chunk in _chunks(vids, 50):
            req = self._service.videos().list(part="snippet,statistics", id=",".join(chunk))
            resp = self._execute(req, "Failed to load video details.")

            for item in resp.get("items", []):
                videos.append(_parse_video(item))

        return videos

    def fetch_channel_audiences(self, channel_ids: Iterable[str]) -> List[ChannelAudience]:
        ids = list(channel_ids)
        if not ids:
            return []

        out: List[ChannelAudience] = []
        for chunk in _chunks(ids, 50):
            req = self._service.channels().list(part="statistics", id=",".join(chunk))
            resp = self._execute(req, "Failed to load channel statistics.")

            for item in resp.get("items", []):
                stats = item.get("statistics", {}) or {}
                # hiddenSubscriberCount channels omit subscriberCount -> 0
                out.append(
                    ChannelAudience(
                        channel_id=item.get("id", ""),
                        subscriber_count=safe_int(stats.get("subscriberCount")),
                    )
                )

        return out

    def _execute(self, request, fallback_message: str) -> Dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            message = _http_error_message(e) or fallback_message
            logger.error("YouTube API error: %s", message)
            raise FetchError(message) from e
        except (OSError, httplib2.HttpLib2Error) as e:
            logger.error("YouTube API transport error: %s", e)
            raise FetchError(f"{fallback_message} ({e})") from e


def _parse_video(item: Dict[str, Any]) -> VideoRecord:
    snippet = item.get("snippet", {}) or {}
    stats = item.get("statistics", {}) or {}
    thumbs = snippet.get("thumbnails", {}) or {}

    # Some videos hide likes or disable comments -> counts missing
    return VideoRecord(
        video_id=item.get("id", ""),
        title=snippet.get("title", ""),
        channel_id=snippet.get("channelId", ""),
        channel_title=snippet.get("channelTitle", ""),
        published_at=snippet.get("publishedAt", ""),
        view_count=safe_int(stats.get("viewCount")),
        like_count=safe_int(stats.get("likeCount")),
        comment_count=safe_int(stats.get("commentCount")),
        description=snippet.get("description", "") or "",
        thumbnail_high=(thumbs.get("high") or {}).get("url", ""),
        thumbnail_medium=(thumbs.get("medium") or {}).get("url", ""),
        tags=tuple(snippet.get("tags") or ()),
        category_id=snippet.get("categoryId", "") or "",
    )


def _http_error_message(e: HttpError) -> str:
    # error.message from the JSON body, e.g. "API key not valid. Please pass a valid API key."
    try:
        data = json.loads((e.content or b"").decode("utf-8"))
    except ValueError:
        data = None
    error = data.get("error") if isinstance(data, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    if isinstance(message, str) and message.strip():
        return message.strip()

    reason = getattr(e, "reason", None)
    if isinstance(reason, str) and reason.strip():
        return reason.strip()
    return ""


def _clamp_page(n: int) -> int:
    if n < 1:
        return 1
    if n > 50:
        return 50
    return n


def _dedupe(ids: Iterable[Optional[str]]) -> List[str]:
    # dedupe while preserving order
    seen = set()
    unique = []
    for vid in ids:
        if vid and vid not in seen:
            seen.add(vid)
            unique.append(vid)
    return unique


def _chunks(items: List[str], size: int) -> List[List[str]]:
    return [items[i : i + size] for i in range(0, len(items), size)]
