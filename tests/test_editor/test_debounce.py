"""Tests for the typing debouncer."""

import threading

from manuscript_studio.editor.debounce import Debouncer


class TestDebouncer:
    def test_flush_runs_pending_callback_once(self):
        calls: list[int] = []
        debouncer = Debouncer(lambda: calls.append(1), delay=60)
        debouncer.trigger()
        debouncer.trigger()
        assert debouncer.pending
        assert debouncer.flush() is True
        assert calls == [1]
        assert not debouncer.pending

    def test_flush_without_pending(self):
        debouncer = Debouncer(lambda: None, delay=60)
        assert debouncer.flush() is False

    def test_cancel_drops_callback(self):
        calls: list[int] = []
        debouncer = Debouncer(lambda: calls.append(1), delay=60)
        debouncer.trigger()
        debouncer.cancel()
        assert debouncer.flush() is False
        assert calls == []

    def test_fires_after_idle_window(self):
        fired = threading.Event()
        debouncer = Debouncer(fired.set, delay=0.01)
        debouncer.trigger()
        assert fired.wait(timeout=5)
        assert not debouncer.pending

    def test_replaced_timer_does_not_fire(self):
        calls: list[int] = []
        debouncer = Debouncer(lambda: calls.append(1), delay=60)
        debouncer.trigger()
        stale = debouncer._timer
        debouncer.trigger()
        debouncer._fire(stale)
        assert calls == []
        assert debouncer.pending
        debouncer.cancel()

    def test_current_timer_fires(self):
        calls: list[int] = []
        debouncer = Debouncer(lambda: calls.append(1), delay=60)
        debouncer.trigger()
        current = debouncer._timer
        current.cancel()
        debouncer._fire(current)
        assert calls == [1]
        assert not debouncer.pending
