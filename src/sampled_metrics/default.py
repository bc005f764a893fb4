"""Process-wide default metrics instance.

Applications that want a singleton use these helpers; the batcher type itself
keeps no module-level state.
"""

from __future__ import annotations

from typing import Any

from .batcher import MetricBatcher

# Global metrics instance, disabled until configured
_default_metrics = MetricBatcher()


def get_default_metrics() -> MetricBatcher:
    """Get the global metrics batcher."""
    return _default_metrics


def configure(options: Any = None, **kwargs: Any) -> None:
    """Reconfigure the global metrics batcher."""
    _default_metrics.configure(options, **kwargs)


def increment(metric: str, tags: Any = None) -> None:
    """Increment a counter on the global metrics batcher."""
    _default_metrics.increment(metric, tags)


def flush() -> None:
    """Flush the global metrics batcher."""
    _default_metrics.flush()
