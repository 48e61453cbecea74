from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Mapping, Sequence, Union

from yt_pulse.models import AudienceLookup, ChannelAudience, EnrichedVideo, VideoRecord

logger = logging.getLogger(__name__)

AudienceSource = Union[AudienceLookup, Mapping[str, int], Iterable[ChannelAudience]]
ChannelFetcher = Callable[[List[str]], Iterable[ChannelAudience]]


def unique_channel_ids(videos: Iterable[VideoRecord]) -> List[str]:
    # dedupe while preserving order
    seen = set()
    unique = []
    for v in videos:
        cid = v.channel_id
        if cid and cid not in seen:
            seen.add(cid)
            unique.append(cid)
    return unique


def lookup_audiences(fetch: ChannelFetcher, videos: Sequence[VideoRecord]) -> AudienceLookup:
    """
    Step 1: one upstream lookup over the deduplicated channel ids.
    Any failure degrades to an empty lookup instead of failing the enrichment.
    """
    channel_ids = unique_channel_ids(videos)
    if not channel_ids:
        return AudienceLookup()

    try:
        records = list(fetch(channel_ids))
    except Exception as e:
        logger.warning("Channel lookup failed for %d channels, grading with audience 0: %s", len(channel_ids), e)
        return AudienceLookup(degraded=True)

    audiences = {r.channel_id: r.subscriber_count for r in records}
    missing = len([cid for cid in channel_ids if cid not in audiences])
    if missing:
        logger.debug("%d channel(s) missing from lookup response", missing)
    return AudienceLookup(audiences=audiences)


def enrich(videos: Iterable[VideoRecord], audiences: AudienceSource) -> List[EnrichedVideo]:
    """
    Step 2: attach each video's channel audience. Same order, same length;
    unknown channels get 0.
    """
    table = _as_table(audiences)
    return [EnrichedVideo(video=v, subscriber_count=table.get(v.channel_id, 0)) for v in videos]


def _as_table(audiences: AudienceSource) -> Mapping[str, int]:
    if isinstance(audiences, AudienceLookup):
        return audiences.audiences
    if isinstance(audiences, Mapping):
        return audiences
    return {a.channel_id: a.subscriber_count for a in audiences}
