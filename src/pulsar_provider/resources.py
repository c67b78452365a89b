"""Resource types and the API version each one is managed through."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

from pulsar_provider.admin.client import PulsarAdminClient
from pulsar_provider.config.models import APIVersion
from pulsar_provider.registry import VersionRegistry


class ResourceType(StrEnum):
    """Resources the provider can manage."""

    TENANT = "pulsar_tenant"
    CLUSTER = "pulsar_cluster"
    NAMESPACE = "pulsar_namespace"
    TOPIC = "pulsar_topic"
    SINK = "pulsar_sink"


# Sinks live under the functions worker API, which is only exposed on v3.
RESOURCE_API_VERSIONS: Mapping[ResourceType, APIVersion] = MappingProxyType(
    {
        ResourceType.TENANT: APIVersion.V2,
        ResourceType.CLUSTER: APIVersion.V2,
        ResourceType.NAMESPACE: APIVersion.V2,
        ResourceType.TOPIC: APIVersion.V2,
        ResourceType.SINK: APIVersion.V3,
    }
)


def client_for(
    registry: VersionRegistry, resource: ResourceType | str
) -> PulsarAdminClient:
    """Return the client a resource's CRUD handlers should use."""
    try:
        resource_type = ResourceType(resource)
    except ValueError:
        msg = f"Unknown resource type: {resource}"
        raise ValueError(msg) from None
    return registry.lookup(RESOURCE_API_VERSIONS[resource_type])
