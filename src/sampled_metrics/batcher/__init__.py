"""Metric batching module for sampled, batched delivery."""

from .flush_timer import FlushTimer
from .metric_batcher import MetricBatcher

__all__ = ["MetricBatcher", "FlushTimer"]
