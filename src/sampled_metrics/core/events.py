"""Metric event models for the sampled metrics client.

This module defines the structures that flow through the client:
increment() → MetricQueue → MetricBatch → Transport → collector
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class MetricType(str, Enum):
    """Types of metrics understood by the collector."""

    COUNTER = "counter"


@dataclass(frozen=True)
class MetricEvent:
    """A single sampled metric increment.

    Tags are opaque and kept by reference; the batcher never copies or
    normalizes them.
    """

    metric: str
    tags: Any = field(default_factory=dict)
    type: MetricType = MetricType.COUNTER

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for the batch payload (wire key order)."""
        return {
            "type": self.type.value,
            "metric": self.metric,
            "tags": self.tags,
        }


@dataclass
class MetricBatch:
    """A batch of metric events to be sent to the collector."""

    metrics: list[MetricEvent] = field(default_factory=list)

    def size(self) -> int:
        """Return the number of events in this batch."""
        return len(self.metrics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert batch to dictionary for the collector payload."""
        return {"metrics": [event.to_dict() for event in self.metrics]}


def encode_payload(payload: Any) -> bytes:
    """Serialize a payload to compact UTF-8 JSON, preserving key order."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
