# -*- coding: utf-8 -*-

"""
Flattens the nested Worlds -> Series -> Characters document into a Catalog.

The work runs as three stages, each returning a new structure:

  1) build_definitions   primary entries -> draft records + series id/name lookup
  2) resolve_references  reference entries extend `appears_in` of known drafts
  3) finalize            defaults (rating, logo) + series names -> ResolvedCharacter

`normalize` validates the whole document first, so a malformed document never
yields a partial catalog. The input document is never mutated.
"""

import copy
import hashlib
import logging
from collections import OrderedDict
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from . import config
from .assets import resolve_logo
from .errors import StructuralError
from .models import UNKNOWN_SERIES, Ability, Catalog, ResolvedCharacter

logger = logging.getLogger(__name__)

# Keys set by normalization; a primary entry cannot override them
DERIVED_KEYS = ("universe", "originalSeries", "seriesId", "appearsIn", "seriesNames")

LogoResolver = Callable[..., str]
RatingFn = Callable[[str], str]


# ------------------------------------------------------------
# 1) VALIDATION
# ------------------------------------------------------------

def _is_id(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    if isinstance(v, int):
        return True
    return isinstance(v, str) and bool(v.strip())


def is_reference(entry: Dict[str, Any]) -> bool:
    return bool(entry.get("reference"))


def validate_document(document: Any) -> None:
    """
    Raise StructuralError on the first shape violation.
    Lookup gaps (dangling references) are not violations.
    """
    if not isinstance(document, dict):
        raise StructuralError("root must be an object")
    worlds = document.get("Worlds")
    if not isinstance(worlds, list):
        raise StructuralError("'Worlds' must be a list")

    for wi, world in enumerate(worlds):
        wpath = f"Worlds[{wi}]"
        if not isinstance(world, dict):
            raise StructuralError("world must be an object", wpath)
        if not isinstance(world.get("name"), str) or not world["name"].strip():
            raise StructuralError("world 'name' must be a non-empty string", wpath)
        series_list = world.get("series")
        if not isinstance(series_list, list):
            raise StructuralError("'series' must be a list", wpath)

        for si, series in enumerate(series_list):
            spath = f"{wpath}.series[{si}]"
            if not isinstance(series, dict):
                raise StructuralError("series must be an object", spath)
            if not _is_id(series.get("id")):
                raise StructuralError("series 'id' is required", spath)
            if not isinstance(series.get("name"), str):
                raise StructuralError("series 'name' must be a string", spath)
            chars = series.get("characters")
            if not isinstance(chars, list):
                raise StructuralError("'characters' must be a list", spath)

            for ci, entry in enumerate(chars):
                cpath = f"{spath}.characters[{ci}]"
                if not isinstance(entry, dict):
                    raise StructuralError("character entry must be an object", cpath)
                if is_reference(entry):
                    if not _is_id(entry.get("character_id")):
                        raise StructuralError("reference without 'character_id'", cpath)
                    continue
                if not _is_id(entry.get("id")):
                    raise StructuralError("character 'id' is required", cpath)
                if not isinstance(entry.get("name"), str) or not entry["name"].strip():
                    raise StructuralError("character 'name' must be a non-empty string", cpath)


def iter_entries(document: Dict[str, Any]) -> Iterator[Tuple[str, str, str, Dict[str, Any]]]:
    """Yield (world_name, series_id, series_name, entry) in source order."""
    for world in document["Worlds"]:
        for series in world["series"]:
            sid = str(series["id"])
            for entry in series["characters"]:
                yield world["name"], sid, series["name"], entry


# ------------------------------------------------------------
# 2) STAGES
# ------------------------------------------------------------

def build_definitions(document: Dict[str, Any]) -> Tuple["OrderedDict[str, Dict[str, Any]]", Dict[str, str]]:
    drafts: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
    series_lookup: Dict[str, str] = {}

    for world in document["Worlds"]:
        for series in world["series"]:
            series_lookup[str(series["id"])] = series["name"]

    for universe, sid, sname, entry in iter_entries(document):
        if is_reference(entry):
            continue
        cid = str(entry["id"])
        draft = drafts.get(cid)
        if draft is None:
            draft = {k: copy.deepcopy(v) for k, v in entry.items() if k not in DERIVED_KEYS}
            draft["id"] = cid
            draft["universe"] = universe
            draft["originalSeries"] = sname
            draft["seriesId"] = sid
            draft["appearsIn"] = [sid]
            drafts[cid] = draft
        elif sid not in draft["appearsIn"]:
            # duplicate primary definition: record the appearance only
            draft["appearsIn"].append(sid)

    return drafts, series_lookup


def resolve_references(
    document: Dict[str, Any], drafts: "OrderedDict[str, Dict[str, Any]]"
) -> Tuple["OrderedDict[str, Dict[str, Any]]", List[str]]:
    resolved: "OrderedDict[str, Dict[str, Any]]" = OrderedDict(
        (cid, dict(d, appearsIn=list(d["appearsIn"]))) for cid, d in drafts.items()
    )
    dropped: List[str] = []

    for _, sid, sname, entry in iter_entries(document):
        if not is_reference(entry):
            continue
        target = str(entry["character_id"])
        draft = resolved.get(target)
        if draft is None:
            logger.debug("dropping reference to unknown character %r in series %r", target, sname)
            dropped.append(target)
            continue
        if sid not in draft["appearsIn"]:
            draft["appearsIn"].append(sid)

    return resolved, dropped


def default_rating(cid: str) -> str:
    """
    Stable synthetic rating in [RATING_MIN, RATING_MAX), one decimal.
    Derived from the id so repeated loads agree.
    """
    steps = int(round((config.RATING_MAX - config.RATING_MIN) * 10))
    n = int(hashlib.sha256(cid.encode("utf-8")).hexdigest(), 16) % steps
    return f"{config.RATING_MIN + n / 10:.1f}"


def _str_list(v: Any) -> Tuple[str, ...]:
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, list):
        return ()
    return tuple(str(x) for x in v if isinstance(x, (str, int, float)) and str(x).strip())


def _appearance(v: Any) -> Optional[Dict[str, Dict[str, str]]]:
    if not isinstance(v, dict):
        return None
    out = {}
    for part in ("head", "body", "lower_body"):
        block = v.get(part)
        if isinstance(block, dict) and block:
            out[part] = {str(k): str(val) for k, val in block.items()}
    return out or None


def _rating(v: Any) -> Optional[str]:
    # falsy ratings (missing, 0, "") get a default
    if not v or isinstance(v, bool):
        return None
    return str(v)


def finalize(
    drafts: "OrderedDict[str, Dict[str, Any]]",
    series_lookup: Dict[str, str],
    logo_resolver: LogoResolver = resolve_logo,
    rating_fn: RatingFn = default_rating,
) -> Tuple[ResolvedCharacter, ...]:
    out: List[ResolvedCharacter] = []
    for cid, d in drafts.items():
        name = d["name"].strip()
        raw_logo = d.get("logo") if isinstance(d.get("logo"), str) and d.get("logo").strip() else None
        # bare filenames are resolved too; only a logo with a path is kept verbatim
        logo = logo_resolver(name, cid, d["universe"], logo=raw_logo)

        abilities = tuple(Ability.from_dict(a) for a in (d.get("abilities") or []) if isinstance(a, dict))
        armor = tuple(
            {str(k): str(v) for k, v in item.items()}
            for item in (d.get("armor_costume") or [])
            if isinstance(item, dict) and item
        )

        out.append(
            ResolvedCharacter(
                id=cid,
                name=name,
                universe=d["universe"],
                original_series=d["originalSeries"],
                series_id=d["seriesId"],
                appears_in=tuple(d["appearsIn"]),
                series_names=tuple(series_lookup.get(sid, UNKNOWN_SERIES) for sid in d["appearsIn"]),
                rating=_rating(d.get("rating")) or rating_fn(cid),
                logo=logo,
                alias=_str_list(d.get("alias")),
                title=_str_list(d.get("title")),
                appearance=_appearance(d.get("appearance")),
                armor_costume=armor,
                abilities=abilities,
                gallery=_str_list(d.get("gallery")),
            )
        )
    return tuple(out)


# ------------------------------------------------------------
# 3) ENTRY POINT
# ------------------------------------------------------------

def normalize(
    document: Any,
    logo_resolver: LogoResolver = resolve_logo,
    rating_fn: RatingFn = default_rating,
) -> Catalog:
    validate_document(document)

    drafts, series_lookup = build_definitions(document)
    drafts, dropped = resolve_references(document, drafts)
    characters = finalize(drafts, series_lookup, logo_resolver=logo_resolver, rating_fn=rating_fn)

    logger.info(
        "normalized catalog: characters=%d series=%d dropped_references=%d",
        len(characters),
        len(series_lookup),
        len(dropped),
    )
    return Catalog(characters=characters, series_names=dict(series_lookup), dropped_references=tuple(dropped))
