"""Periodic flush trigger running on a daemon thread."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from loguru import logger


class FlushTimer:
    """Invokes a callback every interval until cancelled."""

    def __init__(self, interval_seconds: float, callback: Callable[[], None], name: str = "metrics-flush-timer"):
        """Initialize the timer.

        Args:
            interval_seconds: Delay between callback invocations
            callback: Function to call on every tick
            name: Thread name
        """
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.name = name

        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def start(self) -> None:
        """Start the timer thread."""
        if self._thread is not None:
            logger.warning(f"{self.name} is already started")
            return

        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug(f"Started {self.name} with {self.interval_seconds:.3f}s interval")

    def cancel(self, timeout: float = 1.0) -> None:
        """Stop the timer; safe to call repeatedly or from the callback."""
        self._stopped.set()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _run(self) -> None:
        """Timer loop."""
        while not self._stopped.wait(min(self.interval_seconds, threading.TIMEOUT_MAX)):
            try:
                self.callback()
            except Exception:
                logger.exception(f"Error in {self.name} callback")

        logger.debug(f"{self.name} finished")
