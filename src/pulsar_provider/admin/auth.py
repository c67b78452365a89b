"""Credential and TLS settings for Pulsar admin clients."""

from __future__ import annotations

import ssl

from pulsar_provider.config.models import ConnectionConfig


def build_auth_headers(config: ConnectionConfig) -> dict[str, str]:
    """Return the HTTP headers that authenticate admin requests.

    An empty token means anonymous access and yields no header.
    """
    token = config.token.get_secret_value()
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def build_tls_verify(config: ConnectionConfig) -> ssl.SSLContext | bool:
    """Build the ``verify`` argument for ``httpx``.

    - insecure connections allowed: certificate verification is disabled
    - trust bundle given: a context that trusts the bundle (loaded eagerly,
      so a missing or malformed file fails here)
    - otherwise: the system defaults
    """
    if config.tls_allow_insecure_connection:
        return False
    if config.tls_trust_certs_file_path:
        return ssl.create_default_context(cafile=config.tls_trust_certs_file_path)
    return True
