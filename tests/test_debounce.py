"""Debounced search: bursts collapse into one call carrying the latest input."""

import threading

from herohub.debounce import Debouncer
from herohub.state import BrowseSession, ClearSearch, OpenDetail, SetUniverse


class FakeTimer:
    created = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args, **self.kwargs)


def _debouncer(calls):
    FakeTimer.created = []
    return Debouncer(lambda term: calls.append(term), wait=0.3, timer_factory=FakeTimer)


class TestDebouncer:

    def test_latest_input_wins(self):
        calls = []
        d = _debouncer(calls)
        d("f")
        d("fi")
        d("fir")
        assert [t.cancelled for t in FakeTimer.created] == [True, True, False]
        FakeTimer.created[-1].fire()
        assert calls == ["fir"]

    def test_superseded_timer_is_ignored(self):
        calls = []
        d = _debouncer(calls)
        d("a")
        d("ab")
        # a cancelled timer that fires anyway must not deliver stale input
        FakeTimer.created[0].fire()
        assert calls == []
        FakeTimer.created[1].fire()
        assert calls == ["ab"]

    def test_fires_once(self):
        calls = []
        d = _debouncer(calls)
        d("x")
        FakeTimer.created[0].fire()
        FakeTimer.created[0].fire()
        assert calls == ["x"]
        assert not d.pending

    def test_flush_and_cancel(self):
        calls = []
        d = _debouncer(calls)
        d("now")
        d.flush()
        assert calls == ["now"]
        d("later")
        d.cancel()
        FakeTimer.created[-1].fire()
        assert calls == ["now"]

    def test_uses_wait(self):
        d = _debouncer([])
        d("x")
        assert FakeTimer.created[0].interval == 0.3
        assert FakeTimer.created[0].daemon is True
        assert FakeTimer.created[0].started

    def test_real_timer(self):
        done = threading.Event()
        seen = []

        def record(term):
            seen.append(term)
            done.set()

        d = Debouncer(record, wait=0.1)
        d("s")
        d("sp")
        assert done.wait(2.0)
        assert seen == ["sp"]


def _session(catalog, changes):
    FakeTimer.created = []
    return BrowseSession(catalog, on_change=changes.append, wait=0.3, timer_factory=FakeTimer)


class TestBrowseSession:

    def test_keystrokes_run_one_query(self, catalog):
        changes = []
        session = _session(catalog, changes)
        session.search("f")
        session.search("fi")
        session.search("fire")
        assert changes == []
        assert session.state.params.search_term == ""
        FakeTimer.created[-1].fire()
        assert len(changes) == 1
        assert [ch.id for ch in session.state.results] == ["johnny", "ace"]

    def test_intents_apply_immediately(self, catalog):
        changes = []
        session = _session(catalog, changes)
        state = session.send(SetUniverse("Anime"))
        assert [ch.id for ch in state.results] == ["luffy", "ace", "naruto"]
        state = session.send(OpenDetail(1))
        assert state.detail.id == "ace"
        assert changes[-1] is session.state
        assert FakeTimer.created == []

    def test_clear_drops_pending_keystrokes(self, catalog):
        changes = []
        session = _session(catalog, changes)
        session.search("fire")
        session.send(ClearSearch())
        FakeTimer.created[-1].fire()
        assert session.state.params.search_term == ""
        assert len(session.state.results) == len(catalog)

    def test_flush(self, catalog):
        session = _session(catalog, [])
        session.search("luffy")
        session.flush()
        assert [ch.id for ch in session.state.results] == ["luffy"]
        session.close()
