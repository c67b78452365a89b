"""Error taxonomy for the provider configuration pass."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pulsar_provider.config.models import APIVersion


class ConfigError(Exception):
    """Base class for errors surfaced to the host as a configuration failure."""

    code = "ERROR_PULSAR_CONFIG"

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class InvalidEndpointError(ConfigError):
    """Raised when the web service URL does not parse as an absolute http(s) URL."""

    code = "ERROR_PULSAR_CONFIG_INVALID_WEB_SERVICE_URL"

    def __init__(self, endpoint: object, detail: str) -> None:
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(f"invalid endpoint {endpoint!r}: {detail}")


class InvalidConfigError(ConfigError):
    """Raised when an optional provider option has the wrong type."""

    code = "ERROR_PULSAR_CONFIG_INVALID_OPTION"


class ClientConstructionError(ConfigError):
    """Raised when the admin client for one API version cannot be built."""

    code = "ERROR_PULSAR_CONFIG_CLIENT_CONSTRUCTION"

    def __init__(self, version: APIVersion, cause: BaseException) -> None:
        self.version = version
        self.cause = cause
        super().__init__(
            f"failed to create pulsar admin client for API {version.name}: {cause}"
        )


class RegistryDefectError(LookupError):
    """Raised when a version registry breaks its completeness invariant."""


class AdminAPIError(Exception):
    """Raised when a Pulsar admin API call returns a non-2xx response."""

    def __init__(self, method: str, url: str, status_code: int, detail: str) -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{method} {url} failed: {status_code} {detail}")
