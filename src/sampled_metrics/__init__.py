"""Sampled Metrics - Lightweight sampled counter batching for a metrics collector."""

from .batcher import MetricBatcher
from .config import LoggingConfig, MetricsConfig, setup_logging
from .core import MetricEvent
from .default import configure, flush, get_default_metrics, increment
from .sender import HTTPSender, Transport, TransportError

__version__ = "1.0.0"

__all__ = [
    "MetricBatcher",
    "MetricsConfig",
    "MetricEvent",
    "LoggingConfig",
    "setup_logging",
    "HTTPSender",
    "Transport",
    "TransportError",
    "get_default_metrics",
    "configure",
    "increment",
    "flush",
]
