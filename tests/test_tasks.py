"""Tests for tasks.py and seen_calls.py."""

import threading

from seen_calls import SeenCalls
from tasks import TaskScheduler


class TestTaskScheduler:
    def test_spawn_runs_in_background(self):
        done = threading.Event()
        results = []

        def work(value):
            results.append(value)
            done.set()

        TaskScheduler().spawn(work, 7)
        assert done.wait(2)
        assert results == [7]

    def test_call_later_runs_after_delay(self):
        done = threading.Event()
        tasks = TaskScheduler()
        tasks.call_later(0.2, done.set)
        assert tasks.pending() == 1
        assert done.wait(2)

    def test_failing_task_does_not_escape(self):
        done = threading.Event()

        def broken():
            done.set()
            raise RuntimeError("boom")

        thread = TaskScheduler().spawn(broken)
        thread.join(2)
        assert done.is_set()
        assert not thread.is_alive()

    def test_stop_cancels_pending_timers(self):
        fired = threading.Event()
        tasks = TaskScheduler()
        timer = tasks.call_later(5, fired.set)
        tasks.stop()
        timer.join(2)
        assert not fired.is_set()
        assert tasks.pending() == 0


class TestSeenCalls:
    def test_mark_then_seen(self):
        seen = SeenCalls()
        assert not seen.seen("X")
        seen.mark("X")
        assert all(seen.seen("X") for _ in range(3))
        assert "X" in seen

    def test_mark_twice_keeps_one_entry(self):
        seen = SeenCalls()
        seen.mark("X")
        seen.mark("X")
        seen.mark("Y")
        assert len(seen) == 2
