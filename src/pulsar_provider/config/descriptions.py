"""Human-readable descriptions of provider and resource options."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "endpoint": (
            "Web service url is used to connect to your apache pulsar cluster"
        ),
        "token": (
            "Authentication Token used to grant terraform permissions\n"
            "to modify Apache Pulsar Entities"
        ),
        "api_version": "Api Version to be used for the pulsar admin interaction",
        "tls_trust_certs_file_path": "Path to a custom trusted TLS certificate file",
        "tls_allow_insecure_connection": (
            "Boolean flag to accept untrusted TLS certificates"
        ),
        "admin_roles": "Admin roles to be attached to tenant",
        "allowed_clusters": "Tenant will be able to interact with these clusters",
        "namespace": "Pulsar namespaces are logical groupings of topics",
        "tenant": (
            "An administrative unit for allocating capacity and enforcing an\n"
            "authentication/authorization scheme"
        ),
        "namespace_list": "List of namespaces for a given tenant",
        "enable_duplication": (
            "ensures that each message produced on Pulsar topics is persisted "
            "to disk\nonly once, even if the message is produced more than once"
        ),
        "encrypt_topics": (
            "encrypt messages at the producer and decrypt at the consumer"
        ),
        "max_producers_per_topic": "Max number of producers per topic",
        "max_consumers_per_subscription": "Max number of consumers per subscription",
        "max_consumers_per_topic": "Max number of consumers per topic",
        "dispatch_rate": "Data transfer rate, in and out of the Pulsar Broker",
        "persistence_policy": "Policy for the namespace for data persistence",
        "backlog_quota": "",
        "configs": "Configuration encoded as JSON",
    }
)


def describe(name: str) -> str:
    """Return the description for *name*, or an empty string if unknown."""
    return DESCRIPTIONS.get(name, "")
