# -*- coding: utf-8 -*-

"""
Browse state as an explicit value.

UI events are turned into intents; `dispatch` applies one intent to a state
and returns the next state. The engines never see the presentation layer.

    state = initial_state(catalog)
    state = dispatch(state, catalog, SetSearch("fire"))
    state = dispatch(state, catalog, OpenDetail(0))
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, Tuple, Union

from . import config
from .config import ALL
from .debounce import Debouncer
from .models import Catalog, ResolvedCharacter
from .navigation import NavigationState
from .query import QueryParams, query

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Intents
# ------------------------------------------------------------

@dataclass(frozen=True)
class SetSearch:
    term: str


@dataclass(frozen=True)
class ClearSearch:
    pass


@dataclass(frozen=True)
class SetUniverse:
    universe: str = ALL


@dataclass(frozen=True)
class SetSeries:
    series: str = ALL


@dataclass(frozen=True)
class SetSort:
    sort_by: Optional[str] = None


@dataclass(frozen=True)
class OpenDetail:
    index: int


@dataclass(frozen=True)
class OpenDeepLink:
    character_id: str


@dataclass(frozen=True)
class Step:
    delta: int


@dataclass(frozen=True)
class CloseDetail:
    pass


Intent = Union[SetSearch, ClearSearch, SetUniverse, SetSeries, SetSort, OpenDetail, OpenDeepLink, Step, CloseDetail]


# ------------------------------------------------------------
# State
# ------------------------------------------------------------

@dataclass(frozen=True)
class BrowseState:
    params: QueryParams = field(default_factory=QueryParams)
    results: Tuple[ResolvedCharacter, ...] = ()
    nav: NavigationState = field(default_factory=NavigationState)

    @property
    def detail(self) -> Optional[ResolvedCharacter]:
        return self.nav.current()


def initial_state(catalog: Catalog, params: Optional[QueryParams] = None) -> BrowseState:
    p = params or QueryParams()
    return BrowseState(params=p, results=tuple(query(catalog, p)))


def _requery(state: BrowseState, catalog: Catalog, **changes) -> BrowseState:
    params = replace(state.params, **changes)
    # an open detail view keeps stepping through the list it was opened on
    return replace(state, params=params, results=tuple(query(catalog, params)))


def dispatch(state: BrowseState, catalog: Catalog, intent: Intent) -> BrowseState:
    if isinstance(intent, SetSearch):
        return _requery(state, catalog, search_term=intent.term or "")
    if isinstance(intent, ClearSearch):
        return _requery(state, catalog, search_term="")
    if isinstance(intent, SetUniverse):
        return _requery(state, catalog, universe=intent.universe or ALL)
    if isinstance(intent, SetSeries):
        return _requery(state, catalog, series=intent.series or ALL)
    if isinstance(intent, SetSort):
        return _requery(state, catalog, sort_by=intent.sort_by or None)
    if isinstance(intent, OpenDetail):
        return replace(state, nav=NavigationState.open_at(state.results, intent.index))
    if isinstance(intent, OpenDeepLink):
        nav = NavigationState.open_by_id(state.results, intent.character_id)
        if not nav.is_open:
            logger.debug("deep link %r not in current results", intent.character_id)
        return replace(state, nav=nav)
    if isinstance(intent, Step):
        return replace(state, nav=state.nav.advance(intent.delta))
    if isinstance(intent, CloseDetail):
        return replace(state, nav=state.nav.close())
    raise TypeError(f"unknown intent: {intent!r}")


# ------------------------------------------------------------
# Session
# ------------------------------------------------------------

class BrowseSession:
    """
    Holds the current BrowseState for one interactive front end.

    Intents sent with `send` apply at once. Keystrokes go through `search`,
    which is debounced: a burst of input runs one query with the latest term.
    `on_change` is called with every new state.
    """

    def __init__(
        self,
        catalog: Catalog,
        params: Optional[QueryParams] = None,
        on_change: Optional[Callable[[BrowseState], Any]] = None,
        wait: float = config.SEARCH_DEBOUNCE_SECONDS,
        timer_factory: Callable[..., Any] = threading.Timer,
    ) -> None:
        self.catalog = catalog
        self.on_change = on_change
        self._lock = threading.Lock()
        self._state = initial_state(catalog, params)
        self._search = Debouncer(self._apply_search, wait=wait, timer_factory=timer_factory)

    @property
    def state(self) -> BrowseState:
        return self._state

    def send(self, intent: Intent) -> BrowseState:
        if isinstance(intent, (SetSearch, ClearSearch)):
            # explicit search changes supersede pending keystrokes
            self._search.cancel()
        return self._apply(intent)

    def search(self, term: str) -> None:
        self._search(term)

    def flush(self) -> None:
        """Run a pending search now."""
        self._search.flush()

    def close(self) -> None:
        self._search.cancel()

    def _apply_search(self, term: str) -> None:
        self._apply(SetSearch(term))

    def _apply(self, intent: Intent) -> BrowseState:
        with self._lock:
            self._state = dispatch(self._state, self.catalog, intent)
            state = self._state
        if self.on_change is not None:
            self.on_change(state)
        return state
