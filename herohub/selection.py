# -*- coding: utf-8 -*-

"""
Ranked selections over the catalog: featured characters for the highlights
view and related videos for the detail view.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from . import config
from .models import Catalog, ResolvedCharacter, Video

logger = logging.getLogger(__name__)


def _characters(index) -> List[ResolvedCharacter]:
    if isinstance(index, Catalog):
        return list(index.characters)
    return list(index)


# ------------------------------------------------------------
# 1) FEATURED
# ------------------------------------------------------------

def select_featured(
    index,
    priority_series: Optional[Mapping[str, Sequence[str]]] = None,
    target_count: int = config.FEATURED_COUNT,
) -> List[ResolvedCharacter]:
    """
    One top-rated character per configured (universe, series) pair, in
    configuration order, then topped up with the best remaining ratings.
    Ties go to the character seen first.
    """
    chars = _characters(index)
    priority = config.PRIORITY_SERIES if priority_series is None else priority_series
    if target_count <= 0:
        return []

    featured: List[ResolvedCharacter] = []
    used: Set[str] = set()

    for universe, series_list in priority.items():
        for series_name in series_list:
            pool = [
                ch
                for ch in chars
                if ch.universe == universe and series_name in ch.series_names and ch.id not in used
            ]
            if not pool:
                continue
            # max() keeps the first of equal keys
            best = max(pool, key=lambda c: c.rating_value)
            featured.append(best)
            used.add(best.id)

    if len(featured) < target_count:
        rest = sorted((ch for ch in chars if ch.id not in used), key=lambda c: c.rating_value, reverse=True)
        for ch in rest[: target_count - len(featured)]:
            featured.append(ch)
            used.add(ch.id)

    return featured[:target_count]


# ------------------------------------------------------------
# 2) RELATED VIDEOS
# ------------------------------------------------------------

def videos_by_character(videos: Iterable[Video]) -> Dict[str, List[Video]]:
    out: Dict[str, List[Video]] = OrderedDict()
    for v in videos:
        out.setdefault(v.character_id, []).append(v)
    return out


def _take(candidates: Iterable[Video], picked: List[Video], seen: Set[str], limit: int) -> None:
    for v in candidates:
        if len(picked) >= limit:
            return
        if v.youtube_id in seen:
            continue
        picked.append(v)
        seen.add(v.youtube_id)


def direct_videos(character_id: str, videos: Iterable[Video], limit: int = config.VIDEO_LIMIT) -> List[Video]:
    picked: List[Video] = []
    _take((v for v in videos if v.character_id == character_id), picked, set(), limit)
    return picked


def recommend_videos(
    character_id: str,
    index,
    all_videos: Sequence[Video],
    limit: int = config.VIDEO_LIMIT,
) -> List[Video]:
    """
    Videos of the character itself; only when there are none, videos of
    characters sharing a series, then of characters sharing the universe.
    """
    if limit <= 0:
        return []

    direct = direct_videos(character_id, all_videos, limit)
    if direct:
        return direct

    chars = _characters(index)
    target = next((ch for ch in chars if ch.id == character_id), None)
    if target is None:
        logger.debug("no recommendations: unknown character %r", character_id)
        return []

    by_char = videos_by_character(all_videos)
    picked: List[Video] = []
    seen_videos: Set[str] = set()
    seen_chars: Set[str] = {character_id}

    target_series = set(target.series_names)
    tiers = (
        lambda ch: bool(target_series.intersection(ch.series_names)),
        lambda ch: ch.universe == target.universe,
    )
    for related in tiers:
        for ch in chars:
            if len(picked) >= limit:
                break
            if ch.id in seen_chars or not related(ch):
                continue
            seen_chars.add(ch.id)
            _take(by_char.get(ch.id, ()), picked, seen_videos, limit)
        if len(picked) >= limit:
            break

    logger.debug("fallback videos for %r: %d", character_id, len(picked))
    return picked
