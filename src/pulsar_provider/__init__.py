"""Configuration and client dispatch layer for the Pulsar infrastructure provider."""

from pulsar_provider.config.models import (
    SUPPORTED_API_VERSIONS,
    APIVersion,
    ConnectionConfig,
    ProviderConfig,
)
from pulsar_provider.errors import (
    ClientConstructionError,
    ConfigError,
    InvalidConfigError,
    InvalidEndpointError,
)
from pulsar_provider.provider import Provider, configure
from pulsar_provider.registry import VersionRegistry

__all__ = [
    "SUPPORTED_API_VERSIONS",
    "APIVersion",
    "ClientConstructionError",
    "ConfigError",
    "ConnectionConfig",
    "InvalidConfigError",
    "InvalidEndpointError",
    "Provider",
    "ProviderConfig",
    "VersionRegistry",
    "configure",
]
