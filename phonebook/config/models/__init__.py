"""Configuration models for each settings section."""

from phonebook.config.models.api import APIConfig
from phonebook.config.models.mutation import MutationConfig
from phonebook.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from phonebook.config.models.store import StoreConfig

__all__ = [
    "APIConfig",
    "LoggingConfig",
    "MetricsConfig",
    "MutationConfig",
    "ObservabilityConfig",
    "StoreConfig",
    "TracingConfig",
]
