"""Test doubles for client construction."""

from __future__ import annotations

from dataclasses import dataclass, field

from pulsar_provider.config.models import APIVersion, ConnectionConfig

ENDPOINT = "https://pulsar.example.com:8080"


@dataclass
class FakeClient:
    config: ConnectionConfig
    version: APIVersion
    closed: bool = False

    async def close(self) -> None:
        self.closed = True


@dataclass
class CountingFactory:
    """Client factory that records calls and can fail on a chosen version."""

    fail_on: APIVersion | None = None
    error: Exception = field(default_factory=lambda: OSError("tls handshake failed"))
    calls: list[APIVersion] = field(default_factory=list)

    def __call__(self, config: ConnectionConfig, version: APIVersion) -> FakeClient:
        self.calls.append(version)
        if version == self.fail_on:
            raise self.error
        return FakeClient(config, version)
