# -*- coding: utf-8 -*-

"""HeroHub: character catalog normalization, querying and recommendations."""

from .errors import LoadError, MediaUnavailable, StructuralError
from .models import Ability, Catalog, ResolvedCharacter, Video
from .navigation import NavigationState
from .normalizer import normalize
from .query import QueryParams, query
from .selection import recommend_videos, select_featured
from .state import BrowseSession, BrowseState, dispatch, initial_state

__version__ = "0.1.0"

__all__ = [
    "Ability",
    "BrowseSession",
    "BrowseState",
    "Catalog",
    "LoadError",
    "MediaUnavailable",
    "NavigationState",
    "QueryParams",
    "ResolvedCharacter",
    "StructuralError",
    "Video",
    "dispatch",
    "initial_state",
    "normalize",
    "query",
    "recommend_videos",
    "select_featured",
]
