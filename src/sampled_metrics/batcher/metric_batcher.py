"""Sampled metric batcher.

Increments are sampled, queued in memory and flushed to the collector as a
single request, either periodically by a FlushTimer or immediately when an
error metric is recorded. Flushing drains the queue before the request is
dispatched, and the request itself is fire-and-forget.
"""

from __future__ import annotations

import random
import threading
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from ..config.settings import MetricsConfig
from ..core.events import MetricBatch, MetricEvent
from ..queuer import MetricQueue
from ..sender import Completion, HTTPSender, SendResponse, Transport
from .flush_timer import FlushTimer

FLUSH_PATH = "/m"
FLUSH_HEADERS = {"Content-Type": "text/plain"}
ERROR_MARKER = "error"


class MetricBatcher:
    """Samples, buffers and flushes counter metrics."""

    def __init__(
        self,
        config: Any = None,
        transport: Optional[Transport] = None,
        random_source: Callable[[], float] = random.random,
    ):
        """Initialize the batcher.

        Args:
            config: Options mapping or MetricsConfig; None means defaults (disabled)
            transport: Delivery transport, an HTTPSender by default
            random_source: Uniform [0, 1) generator used for sampling
        """
        self._transport: Transport = transport if transport is not None else HTTPSender()
        self._random_source = random_source

        self._config = MetricsConfig()
        self._queue = MetricQueue()
        self._timer: Optional[FlushTimer] = None
        self._lock = threading.RLock()

        # Statistics
        self._stats_lock = threading.Lock()
        self._total_accepted = 0
        self._total_sampled_out = 0
        self._total_flushes = 0
        self._total_events_flushed = 0
        self._total_failed_flushes = 0
        self._last_error: Optional[str] = None

        self.configure(config)

    @property
    def config(self) -> MetricsConfig:
        return self._config

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def sample_rate(self) -> float:
        return self._config.sample_rate

    @property
    def flush_interval_ms(self) -> int:
        return self._config.flush_interval_ms

    @property
    def endpoint_url(self) -> str:
        return f"https://{self._config.host}{FLUSH_PATH}"

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def queue(self) -> List[MetricEvent]:
        """Copy of the queued events, in the order they will be sent."""
        return self._queue.snapshot()

    @property
    def timer_running(self) -> bool:
        timer = self._timer
        return timer is not None and timer.is_running

    def configure(self, options: Any = None, **kwargs: Any) -> None:
        """Replace the configuration and reset the queue.

        Unspecified options take their defaults. Unflushed events are
        discarded. The flush timer is restarted when sampling is enabled.
        """
        if kwargs:
            options = {**(dict(options) if hasattr(options, "keys") else {}), **kwargs}

        config = MetricsConfig.from_options(options)

        with self._lock:
            self._cancel_timer()

            self._config = config
            discarded = self._queue.drain()
            if discarded:
                logger.debug(f"Discarded {len(discarded)} unflushed metrics on reconfigure")

            if config.enabled:
                self._timer = FlushTimer(config.flush_interval_seconds, self._flush_on_timer)
                self._timer.start()

        logger.debug(f"Metrics configured: host={config.host} sample_rate={config.sample_rate} flush_interval_ms={config.flush_interval_ms}")

    def increment(self, metric: str, tags: Any = None) -> None:
        """Increment the counter identified by metric and tags by one.

        Args:
            metric: Name of the metric to increment
            tags: Dimensions associated with the metric, passed through as-is
        """
        if not isinstance(metric, str) or not metric:
            logger.warning(f"Dropping metric with invalid name {metric!r}")
            return

        # Accepted events always belong to the config that sampled them.
        with self._lock:
            if self._random_source() >= self._config.sample_rate:
                with self._stats_lock:
                    self._total_sampled_out += 1
                return

            self._queue.enqueue(MetricEvent(metric=metric, tags={} if tags is None else tags))

        with self._stats_lock:
            self._total_accepted += 1

        # A match at index 0 ("error...") deliberately does not flush.
        if metric.find(ERROR_MARKER) > 0:
            self.flush()

    def flush(self) -> None:
        """Send all queued metrics as one batch without waiting for the response."""
        events = self._queue.drain()
        if not events:
            return

        batch = MetricBatch(metrics=events)
        payload = batch.to_dict()
        url = self.endpoint_url

        with self._stats_lock:
            self._total_flushes += 1
            self._total_events_flushed += batch.size()

        logger.debug(f"Flushing {batch.size()} metrics to {url}")

        try:
            self._transport.send(url, payload, dict(FLUSH_HEADERS), self._make_completion(payload))
        except Exception as e:
            self._record_failure(f"Failed to dispatch metrics batch: {e}")

    def close(self, flush: bool = True) -> None:
        """Stop the flush timer and optionally send what is still queued."""
        with self._lock:
            self._cancel_timer()

        if flush:
            self.flush()

    def get_stats(self) -> Dict[str, Any]:
        """Get batcher statistics."""
        with self._stats_lock:
            return {
                "enabled": self.enabled,
                "queue_size": self._queue.size(),
                "timer_running": self.timer_running,
                "total_accepted": self._total_accepted,
                "total_sampled_out": self._total_sampled_out,
                "total_flushes": self._total_flushes,
                "total_events_flushed": self._total_events_flushed,
                "total_failed_flushes": self._total_failed_flushes,
                "last_error": self._last_error,
                "config": self._config.model_dump(),
            }

    def _flush_on_timer(self) -> None:
        self.flush()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _make_completion(self, payload: Dict[str, Any]) -> Completion:
        def completion(error: Optional[Exception], response: Optional[SendResponse]) -> None:
            logger.debug(f"Sent {payload}, received {[error, response]}")
            if error is not None:
                self._record_failure(f"Failed to send metrics batch: {error}")

        return completion

    def _record_failure(self, message: str) -> None:
        with self._stats_lock:
            self._total_failed_flushes += 1
            self._last_error = message
        logger.warning(message)

    def __enter__(self) -> MetricBatcher:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
