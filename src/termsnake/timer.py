# timer.py
from __future__ import annotations
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """
    Calls `callback` every `interval` seconds on a daemon thread until
    stopped. The first call happens one interval after `start()`.
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "score-timer"):
        self.interval = interval
        self.callback = callback
        self.name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.active:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval + 1.0)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("Timer callback failed in %s", self.name)
