"""Pydantic configuration models for the Pulsar provider."""

from __future__ import annotations

from enum import StrEnum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
)


class APIVersion(StrEnum):
    """Pulsar admin API revisions a client can speak."""

    V1 = "v1"
    V2 = "v2"
    V3 = "v3"

    @property
    def base_path(self) -> str:
        """Admin REST path prefix for this revision."""
        if self is APIVersion.V1:
            return "/admin"
        return f"/admin/{self.value}"


# Iteration order used when building a registry.
SUPPORTED_API_VERSIONS: tuple[APIVersion, ...] = (
    APIVersion.V1,
    APIVersion.V2,
    APIVersion.V3,
)


class ProviderConfig(BaseModel):
    """Provider options as supplied by the host.

    ``endpoint`` is kept exactly as given; it is checked by
    :func:`pulsar_provider.config.validator.validate_endpoint` before any
    normalization happens.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices("endpoint", "web_service_url"),
    )
    token: SecretStr | None = None
    tls_trust_certs_file_path: str | None = None
    tls_allow_insecure_connection: bool | None = None
    # Deprecated: every API version is always built.
    api_version: str | None = None
    request_timeout_seconds: float = Field(default=30.0, gt=0)


class ConnectionConfig(BaseModel):
    """Normalized connection settings shared by every admin client."""

    model_config = ConfigDict(frozen=True)

    web_service_url: str
    token: SecretStr = SecretStr("")
    tls_trust_certs_file_path: str = ""
    tls_allow_insecure_connection: bool = False
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    @classmethod
    def from_provider_config(
        cls, config: ProviderConfig, *, web_service_url: str
    ) -> ConnectionConfig:
        """Apply defaults for every option the host left out."""
        return cls(
            web_service_url=web_service_url,
            token=config.token or SecretStr(""),
            tls_trust_certs_file_path=config.tls_trust_certs_file_path or "",
            tls_allow_insecure_connection=bool(config.tls_allow_insecure_connection),
            request_timeout_seconds=config.request_timeout_seconds,
        )
