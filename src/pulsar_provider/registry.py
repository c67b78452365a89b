"""Version registry — the per-session map from API version to admin client."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

import structlog

from pulsar_provider.admin.client import PulsarAdminClient
from pulsar_provider.admin.factory import ClientFactory, build_client
from pulsar_provider.config.models import (
    SUPPORTED_API_VERSIONS,
    APIVersion,
    ConnectionConfig,
)
from pulsar_provider.errors import ClientConstructionError, RegistryDefectError

logger = structlog.get_logger()


class VersionRegistry(Mapping[APIVersion, PulsarAdminClient]):
    """Read-only mapping holding exactly one client per supported version.

    The constructor refuses incomplete input, so every registry a caller can
    observe is total over *versions*. Concurrent readers need no locking.
    """

    def __init__(
        self,
        clients: Mapping[APIVersion, PulsarAdminClient],
        versions: Iterable[APIVersion] = SUPPORTED_API_VERSIONS,
    ) -> None:
        expected = tuple(versions)
        missing = [v.name for v in expected if v not in clients]
        if missing:
            msg = f"Registry is missing clients for: {', '.join(missing)}"
            raise RegistryDefectError(msg)
        unexpected = [v for v in clients if v not in expected]
        if unexpected:
            msg = f"Registry got clients for unsupported versions: {unexpected}"
            raise RegistryDefectError(msg)
        for version, client in clients.items():
            if client.version != version:
                msg = (
                    f"Client registered under {version.name} speaks "
                    f"{client.version.name}"
                )
                raise RegistryDefectError(msg)
        self._clients = MappingProxyType({v: clients[v] for v in expected})

    def __getitem__(self, version: APIVersion) -> PulsarAdminClient:
        return self._clients[version]

    def __iter__(self) -> Iterator[APIVersion]:
        return iter(self._clients)

    def __len__(self) -> int:
        return len(self._clients)

    def __repr__(self) -> str:
        versions = ", ".join(v.name for v in self._clients)
        return f"VersionRegistry({versions})"

    def lookup(self, version: APIVersion) -> PulsarAdminClient:
        """Return the client for *version*.

        A miss means the registry was built wrong, not that the caller asked
        for something unusual.
        """
        try:
            return self._clients[version]
        except KeyError:
            msg = f"No admin client registered for API version {version!r}"
            raise RegistryDefectError(msg) from None

    async def aclose(self) -> None:
        """Release every client's connection pool."""
        for client in self._clients.values():
            await client.close()

    async def __aenter__(self) -> VersionRegistry:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


def build_registry(
    config: ConnectionConfig,
    *,
    factory: ClientFactory = build_client,
    versions: Iterable[APIVersion] = SUPPORTED_API_VERSIONS,
) -> VersionRegistry:
    """Build one client per version, all or nothing.

    The first failing version aborts the build; later versions are not
    attempted and the clients built so far are dropped.
    """
    expected = tuple(versions)
    built: dict[APIVersion, PulsarAdminClient] = {}
    for version in expected:
        try:
            built[version] = factory(config, version)
        except ClientConstructionError as exc:
            logger.error(
                "registry.build_failed",
                api_version=version.name,
                built=len(built),
                error=str(exc.cause),
            )
            raise
        except Exception as exc:
            logger.error(
                "registry.build_failed",
                api_version=version.name,
                built=len(built),
                error=str(exc),
            )
            raise ClientConstructionError(version, exc) from exc
        logger.debug("registry.client_built", api_version=version.name)
    return VersionRegistry(built, expected)
