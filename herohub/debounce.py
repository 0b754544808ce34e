# -*- coding: utf-8 -*-

import threading
from typing import Any, Callable, Optional, Tuple

from . import config


class Debouncer:
    """
    Coalesce bursts of calls into one call `wait` seconds after the last one.

    Only the latest arguments are ever delivered; a pending call that has been
    superseded is dropped even if its timer already fired.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float = config.SEARCH_DEBOUNCE_SECONDS,
        timer_factory: Callable[..., Any] = threading.Timer,
    ) -> None:
        self.func = func
        self.wait = wait
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer = None
        self._generation = 0
        self._pending: Optional[Tuple[tuple, dict]] = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending = (args, kwargs)
            timer = self._timer_factory(self.wait, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                return
            args, kwargs = self._pending
            self._pending = None
            self._timer = None
        self.func(*args, **kwargs)

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def flush(self) -> None:
        """Run the pending call now, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            generation = self._generation
        self._fire(generation)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
