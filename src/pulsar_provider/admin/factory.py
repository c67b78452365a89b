"""Client factory — builds one admin client per API version."""

from __future__ import annotations

from collections.abc import Callable

from pulsar_provider.admin.client import PulsarAdminClient
from pulsar_provider.config.models import APIVersion, ConnectionConfig
from pulsar_provider.errors import ClientConstructionError

ClientFactory = Callable[[ConnectionConfig, APIVersion], PulsarAdminClient]


def build_client(config: ConnectionConfig, version: APIVersion) -> PulsarAdminClient:
    """Create the admin client for *version*.

    Construction loads TLS material but issues no API calls. Any failure is
    wrapped in :class:`ClientConstructionError` naming the version.
    """
    try:
        return PulsarAdminClient(config, version)
    except Exception as exc:
        raise ClientConstructionError(version, exc) from exc
