"""In-memory metric queue for the sampled metrics client.

This module provides a thread-safe, append-only queue that buffers accepted
metric events until the batcher drains it. Draining swaps in a fresh list
under the lock, so appends racing with a flush always land in the new queue.
"""

from __future__ import annotations

import threading

from loguru import logger

from ..core.events import MetricEvent


class MetricQueue:
    """Thread-safe in-memory queue of metric events."""

    def __init__(self):
        """Initialize an empty queue."""
        self._events: list[MetricEvent] = []
        self._lock = threading.Lock()

        # Statistics
        self._total_enqueued = 0
        self._total_drained = 0

    def enqueue(self, event: MetricEvent) -> int:
        """Append an event to the queue.

        Args:
            event: Event to enqueue

        Returns:
            Queue size after the append
        """
        with self._lock:
            self._events.append(event)
            self._total_enqueued += 1
            return len(self._events)

    def drain(self) -> list[MetricEvent]:
        """Swap the queue for an empty one and return the previous contents."""
        with self._lock:
            events, self._events = self._events, []
            self._total_drained += len(events)

        if events:
            logger.debug(f"Drained {len(events)} metric events from queue")

        return events

    def snapshot(self) -> list[MetricEvent]:
        """Return a copy of the queued events in insertion order."""
        with self._lock:
            return list(self._events)

    def size(self) -> int:
        """Return the current queue size."""
        with self._lock:
            return len(self._events)

    def get_stats(self) -> dict:
        """Get queue statistics."""
        with self._lock:
            return {
                "current_size": len(self._events),
                "total_enqueued": self._total_enqueued,
                "total_drained": self._total_drained,
            }
