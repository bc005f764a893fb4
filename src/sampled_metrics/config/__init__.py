"""Configuration module for the sampled metrics client."""

from .logger_config import setup_logging
from .settings import DEFAULT_FLUSH_INTERVAL_MS, DEFAULT_HOST, DEFAULT_SAMPLE_RATE, LoggingConfig, MetricsConfig

__all__ = ["MetricsConfig", "LoggingConfig", "setup_logging", "DEFAULT_HOST", "DEFAULT_SAMPLE_RATE", "DEFAULT_FLUSH_INTERVAL_MS"]
