"""Configuration section models."""

from templateshift.config.models.migration import (
    MigrationLoggingConfig,
    TemplateMigrationConfig,
)
from templateshift.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)

__all__ = [
    "LoggingConfig",
    "MetricsConfig",
    "MigrationLoggingConfig",
    "ObservabilityConfig",
    "TemplateMigrationConfig",
]
