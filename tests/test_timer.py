"""Tests for termsnake.timer"""
import logging
import threading
import time

from termsnake.timer import RepeatingTimer


class TestRepeatingTimer:
    def test_fires_repeatedly_until_stopped(self):
        hits = []
        enough = threading.Event()

        def cb():
            hits.append(1)
            if len(hits) >= 3:
                enough.set()

        timer = RepeatingTimer(0.01, cb)
        timer.start()
        try:
            assert enough.wait(2.0)
        finally:
            timer.stop()
        assert not timer.active
        count = len(hits)
        time.sleep(0.05)
        assert len(hits) == count

    def test_first_call_waits_one_interval(self):
        hits = []
        timer = RepeatingTimer(5.0, lambda: hits.append(1))
        timer.start()
        timer.stop()
        assert hits == []

    def test_start_twice_keeps_one_thread(self):
        timer = RepeatingTimer(5.0, lambda: None)
        timer.start()
        first = timer._thread
        timer.start()
        assert timer._thread is first
        timer.stop()

    def test_stop_without_start(self):
        RepeatingTimer(1.0, lambda: None).stop()

    def test_stop_from_callback(self):
        stopped = threading.Event()
        timer = None

        def cb():
            timer.stop()
            stopped.set()

        timer = RepeatingTimer(0.01, cb)
        timer.start()
        assert stopped.wait(2.0)

    def test_failing_callback_is_logged_and_timer_keeps_going(self, caplog):
        hits = []
        again = threading.Event()

        def cb():
            hits.append(1)
            if len(hits) == 1:
                raise ValueError("boom")
            again.set()

        timer = RepeatingTimer(0.01, cb, name="flaky")
        with caplog.at_level(logging.ERROR, logger="termsnake"):
            timer.start()
            try:
                assert again.wait(2.0)
            finally:
                timer.stop()
        assert "Timer callback failed in flaky" in caplog.text
