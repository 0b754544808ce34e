# -*- coding: utf-8 -*-

"""
Filtering and sorting over the character index.

Everything here is pure: the catalog is never modified and an empty result is
a normal answer, not an error.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import ALL
from .models import Catalog, ResolvedCharacter

SORT_KEYS = ("name", "rating", "universe")


@dataclass(frozen=True)
class QueryParams:
    search_term: str = ""
    universe: str = ALL
    series: str = ALL
    sort_by: Optional[str] = None


def matches_search(ch: ResolvedCharacter, term: str) -> bool:
    if not term:
        return True
    t = term.lower()
    if t in ch.name.lower():
        return True
    if any(t in a.lower() for a in ch.alias):
        return True
    if any(t in x.lower() for x in ch.title):
        return True
    return any(t in ab.name.lower() or t in ab.short_description.lower() for ab in ch.abilities)


def matches_universe(ch: ResolvedCharacter, universe: str) -> bool:
    return universe == ALL or ch.universe == universe


def matches_series(ch: ResolvedCharacter, series: str) -> bool:
    return series == ALL or series in ch.series_names


def _name_key(ch: ResolvedCharacter) -> Tuple[str, str]:
    # case-insensitive first, exact spelling breaks ties
    return ch.name.casefold(), ch.name


def sort_characters(chars: Iterable[ResolvedCharacter], sort_by: Optional[str]) -> List[ResolvedCharacter]:
    out = list(chars)
    if sort_by == "name":
        out.sort(key=_name_key)
    elif sort_by == "rating":
        # sort() is stable with reverse=True as well, equal ratings keep their order
        out.sort(key=lambda c: c.rating_value, reverse=True)
    elif sort_by == "universe":
        out.sort(key=lambda c: (c.universe.casefold(), c.universe) + _name_key(c))
    return out


def query(catalog: Catalog, params: Optional[QueryParams] = None) -> List[ResolvedCharacter]:
    p = params or QueryParams()
    hits = (
        ch
        for ch in catalog.characters
        if matches_search(ch, p.search_term or "")
        and matches_universe(ch, p.universe or ALL)
        and matches_series(ch, p.series or ALL)
    )
    return sort_characters(hits, p.sort_by)


# ------------------------------------------------------------
# Facets / view helpers
# ------------------------------------------------------------

def series_options(catalog: Catalog) -> List[str]:
    """Sentinel first, then every series name once, in document order."""
    out = [ALL]
    for name in catalog.series_names.values():
        if name not in out:
            out.append(name)
    return out


def universe_options(catalog: Catalog) -> List[str]:
    out = [ALL]
    for ch in catalog.characters:
        if ch.universe not in out:
            out.append(ch.universe)
    return out


def results_label(results: Sequence[ResolvedCharacter]) -> str:
    n = len(results)
    return f"{n} character{'' if n == 1 else 's'} found"


def star_breakdown(rating) -> Tuple[int, bool, int]:
    """
    (full, half, empty) star counts for a rating like "8.7": one full star per
    whole point, a half star for a fraction of .5 or more, and empty stars only
    while the total stays under five. Ratings of 5 and above have no empty stars.
    """
    try:
        value = float(rating)
    except (TypeError, ValueError):
        value = 0.0
    if math.isnan(value) or value < 0:
        value = 0.0
    full = int(math.floor(value))
    half = (value % 1) >= 0.5
    empty = max(0, 5 - full - (1 if half else 0))
    return full, half, empty
