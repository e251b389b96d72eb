"""Configuration management for the publish tool."""

from registry_publish.config.models import (
    PublishConfig,
    RegistryConfig,
    TimeoutsConfig,
)

__all__ = [
    "PublishConfig",
    "RegistryConfig",
    "TimeoutsConfig",
]
