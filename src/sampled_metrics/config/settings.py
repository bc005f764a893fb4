"""Configuration for the sampled metrics client.

Options arrive from application code as loosely typed mappings. Anything
missing or invalid is replaced with its default rather than rejected, so
configuring the client never fails.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_HOST = "api.segment.io/v1"
DEFAULT_SAMPLE_RATE = 0.0  # Metrics disabled by default
DEFAULT_FLUSH_INTERVAL_MS = 30 * 1000


def _as_number(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings to float, None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


class MetricsConfig(BaseModel):
    """Batcher configuration, always replaced wholesale on reconfigure."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = Field(default=DEFAULT_HOST, description="Collector host and path prefix, without scheme")
    sample_rate: float = Field(
        default=DEFAULT_SAMPLE_RATE,
        validation_alias=AliasChoices("sampleRate", "sample_rate"),
        description="Probability in [0, 1] that an increment is kept",
    )
    flush_interval_ms: int = Field(
        default=DEFAULT_FLUSH_INTERVAL_MS,
        validation_alias=AliasChoices("flushIntervalMs", "flush_interval_ms", "flushTimer"),
        description="Milliseconds between periodic flushes",
    )

    @field_validator("host", mode="before")
    @classmethod
    def default_invalid_host(cls, v: Any) -> str:
        """Fall back to the default host for blank or non-string values."""
        if isinstance(v, str) and v.strip().strip("/"):
            return v.strip().strip("/")
        logger.warning(f"Invalid metrics host {v!r}, using {DEFAULT_HOST}")
        return DEFAULT_HOST

    @field_validator("sample_rate", mode="before")
    @classmethod
    def clamp_sample_rate(cls, v: Any) -> float:
        """Treat negative or NaN rates as disabled and cap at 1, overflowing values included."""
        rate = _as_number(v)
        if rate is None or math.isnan(rate) or rate < 0:
            logger.warning(f"Invalid metrics sample rate {v!r}, metrics disabled")
            return DEFAULT_SAMPLE_RATE
        if rate > 1:
            logger.warning(f"Metrics sample rate {v!r} above 1, using 1")
            return 1.0
        return rate

    @field_validator("flush_interval_ms", mode="before")
    @classmethod
    def default_invalid_interval(cls, v: Any) -> int:
        """Fall back to the default interval for non-positive or non-finite values."""
        interval = _as_number(v)
        if interval is None or not math.isfinite(interval) or interval <= 0:
            logger.warning(f"Invalid metrics flush interval {v!r}, using {DEFAULT_FLUSH_INTERVAL_MS}ms")
            return DEFAULT_FLUSH_INTERVAL_MS
        return max(1, int(interval))

    @property
    def enabled(self) -> bool:
        return self.sample_rate > 0

    @property
    def flush_interval_seconds(self) -> float:
        return self.flush_interval_ms / 1000.0

    @classmethod
    def from_options(cls, options: Any = None) -> MetricsConfig:
        """Build a configuration from application options.

        Args:
            options: None, a mapping of option names, or a MetricsConfig

        Returns:
            A complete configuration; unspecified fields take their defaults
        """
        if options is None:
            return cls()
        if isinstance(options, MetricsConfig):
            return options
        if not hasattr(options, "keys"):
            logger.warning(f"Ignoring metrics options of type {type(options).__name__}, using defaults")
            return cls()
        try:
            return cls.model_validate(dict(options))
        except ValidationError as e:
            logger.warning(f"Invalid metrics options, using defaults: {e}")
            return cls()


@dataclass
class LoggingConfig:
    """Configuration for loguru sinks."""

    level: str = "INFO"
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: Path = Path("sampled_metrics.log")
    rotation: str = "10 MB"
    retention: str = "7 days"
