"""Metric queuing module for the sampled metrics client."""

from .metric_queue import MetricQueue

__all__ = ["MetricQueue"]
