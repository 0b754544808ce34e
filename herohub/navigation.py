# -*- coding: utf-8 -*-

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .models import ResolvedCharacter


@dataclass(frozen=True)
class NavigationState:
    """
    Detail-view cursor over the last query result.

    `index` is None while no detail view is open, otherwise it lies in
    [0, len(items) - 1]. Stepping past either end leaves the state unchanged.
    """

    items: Tuple[ResolvedCharacter, ...] = ()
    index: Optional[int] = None

    @classmethod
    def open_at(cls, items: Sequence[ResolvedCharacter], index: int) -> "NavigationState":
        items = tuple(items)
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(items):
            return cls(items=items, index=None)
        return cls(items=items, index=index)

    @classmethod
    def open_by_id(cls, items: Sequence[ResolvedCharacter], cid: str) -> "NavigationState":
        """Open on `cid`'s position in `items`; stays closed if it is not there."""
        items = tuple(items)
        for i, ch in enumerate(items):
            if ch.id == cid:
                return cls(items=items, index=i)
        return cls(items=items, index=None)

    @property
    def is_open(self) -> bool:
        return self.index is not None

    def current(self) -> Optional[ResolvedCharacter]:
        if self.index is None:
            return None
        return self.items[self.index]

    def can_go_previous(self) -> bool:
        return self.index is not None and self.index > 0

    def can_go_next(self) -> bool:
        return self.index is not None and self.index < len(self.items) - 1

    def advance(self, step: int) -> "NavigationState":
        if self.index is None:
            return self
        target = self.index + step
        if not 0 <= target < len(self.items):
            return self
        return replace(self, index=target)

    def close(self) -> "NavigationState":
        return replace(self, index=None)
