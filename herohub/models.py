# -*- coding: utf-8 -*-

"""
Data contracts for the catalog.

Raw documents are plain dicts as parsed from JSON:

  data.json:
    { "Worlds": [ { "name": ..., "series": [ { "id", "name", "characters": [...] } ] } ] }
  character entry:
    primary   -> { "id", "name", "alias"?, "title"?, "rating"?, "logo"?, "appearance"?,
                   "armor_costume"?, "abilities"?, "gallery"? }
    reference -> { "reference": true, "character_id": ... }
  videos.json:
    { "videos": [ { "character_id", "youtube_id", "title", "duration", "views" } ] }

Normalized records below are what the rest of the package works with.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={}"
YOUTUBE_THUMB_URL = "https://img.youtube.com/vi/{}/hqdefault.jpg"

# Label for a series id with no name in the lookup
UNKNOWN_SERIES = "Unknown"


@dataclass(frozen=True)
class Ability:
    name: str
    type: Optional[str] = None
    short_description: str = ""
    full_description: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Ability":
        return cls(
            name=str(raw.get("name") or ""),
            type=raw.get("type") if isinstance(raw.get("type"), str) else None,
            short_description=str(raw.get("short_description") or ""),
            full_description=raw.get("full_description") if isinstance(raw.get("full_description"), str) else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "name": self.name,
            "type": self.type,
            "short_description": self.short_description,
        }
        if self.full_description:
            out["full_description"] = self.full_description
        return out


@dataclass(frozen=True)
class ResolvedCharacter:
    id: str
    name: str
    universe: str
    original_series: str
    series_id: str
    appears_in: Tuple[str, ...]
    series_names: Tuple[str, ...]
    rating: str
    logo: str
    alias: Tuple[str, ...] = ()
    title: Tuple[str, ...] = ()
    appearance: Optional[Dict[str, Dict[str, str]]] = None
    armor_costume: Tuple[Dict[str, str], ...] = ()
    abilities: Tuple[Ability, ...] = ()
    gallery: Tuple[str, ...] = ()

    @property
    def rating_value(self) -> float:
        try:
            return float(self.rating)
        except (TypeError, ValueError):
            return 0.0

    @property
    def primary_series(self) -> str:
        return self.original_series or (self.series_names[0] if self.series_names else UNKNOWN_SERIES)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "universe": self.universe,
            "originalSeries": self.original_series,
            "seriesId": self.series_id,
            "appearsIn": list(self.appears_in),
            "seriesNames": list(self.series_names),
            "rating": self.rating,
            "logo": self.logo,
            "alias": list(self.alias),
            "title": list(self.title),
        }
        if self.appearance:
            out["appearance"] = {k: dict(v) for k, v in self.appearance.items()}
        if self.armor_costume:
            out["armor_costume"] = [dict(item) for item in self.armor_costume]
        if self.abilities:
            out["abilities"] = [a.to_dict() for a in self.abilities]
        if self.gallery:
            out["gallery"] = list(self.gallery)
        return out


@dataclass(frozen=True)
class Video:
    character_id: str
    youtube_id: str
    title: str = ""
    duration: str = ""
    views: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Video":
        return cls(
            character_id=str(raw.get("character_id") or ""),
            youtube_id=str(raw.get("youtube_id") or ""),
            title=str(raw.get("title") or ""),
            duration=str(raw.get("duration") or ""),
            views=str(raw.get("views") or ""),
        )

    @property
    def watch_url(self) -> str:
        return YOUTUBE_WATCH_URL.format(self.youtube_id)

    @property
    def thumbnail_url(self) -> str:
        return YOUTUBE_THUMB_URL.format(self.youtube_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character_id": self.character_id,
            "youtube_id": self.youtube_id,
            "title": self.title,
            "duration": self.duration,
            "views": self.views,
            "watch_url": self.watch_url,
            "thumbnail_url": self.thumbnail_url,
        }


@dataclass(frozen=True)
class Catalog:
    """
    Read-only result of one normalization run.
    `characters` keeps first-seen order; `by_id` and `series_names` are lookups.
    """

    characters: Tuple[ResolvedCharacter, ...]
    series_names: Dict[str, str] = field(default_factory=dict)
    dropped_references: Tuple[str, ...] = ()

    by_id: Dict[str, ResolvedCharacter] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "by_id", {ch.id: ch for ch in self.characters})

    def get(self, cid: str) -> Optional[ResolvedCharacter]:
        return self.by_id.get(cid)

    def __len__(self) -> int:
        return len(self.characters)
