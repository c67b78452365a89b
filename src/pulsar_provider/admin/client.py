"""Async wrapper around the Pulsar admin REST API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pulsar_provider.admin.auth import build_auth_headers, build_tls_verify
from pulsar_provider.config.models import APIVersion, ConnectionConfig
from pulsar_provider.errors import AdminAPIError

logger = structlog.get_logger()

USER_AGENT = "pulsar-provider"


class PulsarAdminClient:
    """Admin API handle bound to one API version and one connection config.

    All paths passed to the request helpers are relative to the version's
    base path, so ``client.get("tenants")`` on a V2 client issues
    ``GET /admin/v2/tenants``.
    """

    def __init__(self, config: ConnectionConfig, version: APIVersion) -> None:
        self._config = config
        self._version = version
        self._auth_headers = build_auth_headers(config)
        # Brokers redirect topic and namespace calls to the owning broker.
        # httpx strips Authorization on cross-origin hops; the hook restores it.
        self._client = httpx.AsyncClient(
            base_url=config.web_service_url,
            headers={"User-Agent": USER_AGENT},
            verify=build_tls_verify(config),
            timeout=config.request_timeout_seconds,
            follow_redirects=True,
            event_hooks={"request": [self._authenticate]},
        )

    async def _authenticate(self, request: httpx.Request) -> None:
        request.headers.update(self._auth_headers)

    @property
    def version(self) -> APIVersion:
        return self._version

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def base_path(self) -> str:
        return self._version.base_path

    def api_path(self, *segments: str) -> str:
        """Join *segments* onto this client's versioned base path."""
        parts = [s.strip("/") for s in segments if s.strip("/")]
        return "/".join([self.base_path, *parts])

    def __repr__(self) -> str:
        return (
            f"PulsarAdminClient(url={self._config.web_service_url!r}, "
            f"version={self._version.name})"
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> PulsarAdminClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- Health ----------------------------------------------------------------

    @retry(
        retry=retry_if_exception_type(httpx.HTTPError),
        stop=stop_after_attempt(10),
        wait=wait_exponential(multiplier=2, max=30),
        reraise=True,
    )
    async def wait_until_ready(self) -> None:
        """Block until the broker health check answers."""
        resp = await self._client.get("/admin/v2/brokers/health")
        resp.raise_for_status()
        logger.info(
            "pulsar_admin.ready",
            url=self._config.web_service_url,
            api_version=self._version.name,
        )

    # -- Requests --------------------------------------------------------------

    async def _request(self, method: str, *segments: str, **kwargs: Any) -> Any:
        path = self.api_path(*segments)
        resp = await self._client.request(method, path, **kwargs)
        if not resp.is_success:
            raise AdminAPIError(method, path, resp.status_code, resp.text)
        if not resp.content:
            return None
        return resp.json()

    async def get(self, *segments: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", *segments, params=params)

    async def put(self, *segments: str, json: Any = None) -> Any:
        return await self._request("PUT", *segments, json=json)

    async def post(self, *segments: str, json: Any = None) -> Any:
        return await self._request("POST", *segments, json=json)

    async def delete(
        self, *segments: str, params: dict[str, Any] | None = None
    ) -> Any:
        return await self._request("DELETE", *segments, params=params)
