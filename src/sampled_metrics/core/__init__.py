"""Core metric models."""

from .events import MetricBatch, MetricEvent, MetricType, encode_payload

__all__ = ["MetricEvent", "MetricBatch", "MetricType", "encode_payload"]
