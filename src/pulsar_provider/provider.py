"""Provider entry point: validate options, build the client registry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import structlog
from pydantic import ValidationError

from pulsar_provider.admin.factory import ClientFactory, build_client
from pulsar_provider.config.defaults import ENV_DEFAULTS, apply_env_defaults
from pulsar_provider.config.descriptions import DESCRIPTIONS
from pulsar_provider.config.loader import read_provider_file
from pulsar_provider.config.models import ConnectionConfig, ProviderConfig
from pulsar_provider.config.validator import validate_endpoint
from pulsar_provider.errors import InvalidConfigError
from pulsar_provider.registry import VersionRegistry, build_registry
from pulsar_provider.resources import ResourceType

logger = structlog.get_logger()

# Hosts that predate version reporting leave it empty.
LEGACY_HOST_VERSION = "0.11+compatible"

API_VERSION_DEPRECATION = (
    "The newer versions can use the right version for the right type of resource"
)

# Value hosts fill in for the deprecated option when it is left unset.
API_VERSION_DEFAULT = "1"


def _raw_endpoint(raw: Mapping[str, Any]) -> Any:
    endpoint = raw.get("endpoint")
    if endpoint is None:
        endpoint = raw.get("web_service_url")
    return endpoint


def _describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def configure(
    raw: Mapping[str, Any] | ProviderConfig,
    *,
    factory: ClientFactory = build_client,
    host_version: str | None = None,
) -> VersionRegistry:
    """Turn host-supplied options into a complete :class:`VersionRegistry`.

    Each step is a gate: the endpoint is validated before anything else is
    touched, and no client is constructed unless every option is well typed.

    Raises:
        InvalidEndpointError: the endpoint is missing or not an http(s) URL.
        InvalidConfigError: another option has the wrong type.
        ClientConstructionError: a version's client could not be built.
    """
    raw_endpoint = raw.endpoint if isinstance(raw, ProviderConfig) else _raw_endpoint(raw)
    logger.info(
        "provider.configure_started",
        host_version=host_version or LEGACY_HOST_VERSION,
    )
    endpoint = validate_endpoint(raw_endpoint)

    if isinstance(raw, ProviderConfig):
        options = raw
    else:
        try:
            options = ProviderConfig.model_validate(dict(raw))
        except ValidationError as exc:
            raise InvalidConfigError(_describe_validation_error(exc)) from exc

    if options.api_version not in (None, API_VERSION_DEFAULT):
        logger.warning(
            "provider.api_version_deprecated",
            api_version=options.api_version,
            detail=API_VERSION_DEPRECATION,
        )

    connection = ConnectionConfig.from_provider_config(options, web_service_url=endpoint)
    registry = build_registry(connection, factory=factory)
    logger.info(
        "provider.configured",
        url=connection.web_service_url,
        api_versions=[v.name for v in registry],
        authenticated=bool(connection.token.get_secret_value()),
    )
    return registry


@dataclass(frozen=True)
class OptionSpec:
    """Host-facing description of one provider option."""

    name: str
    type: type
    required: bool = False
    env_var: str | None = None
    default: Any = None
    description: str = ""
    deprecated: str | None = None


def build_schema(
    descriptions: Mapping[str, str] = DESCRIPTIONS,
) -> Mapping[str, OptionSpec]:
    """Describe every provider option for the host."""
    specs = [
        OptionSpec("endpoint", str, required=True),
        OptionSpec("token", str),
        OptionSpec(
            "api_version",
            str,
            default=API_VERSION_DEFAULT,
            deprecated=API_VERSION_DEPRECATION,
        ),
        OptionSpec("tls_trust_certs_file_path", str),
        OptionSpec("tls_allow_insecure_connection", bool, default=False),
    ]
    return MappingProxyType(
        {
            spec.name: OptionSpec(
                name=spec.name,
                type=spec.type,
                required=spec.required,
                env_var=ENV_DEFAULTS.get(spec.name),
                default=spec.default,
                description=descriptions.get(spec.name, ""),
                deprecated=spec.deprecated,
            )
            for spec in specs
        }
    )


class Provider:
    """Host binding: option schema, resource list and the configure hook."""

    def __init__(
        self,
        *,
        host_version: str | None = None,
        factory: ClientFactory = build_client,
        descriptions: Mapping[str, str] = DESCRIPTIONS,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._host_version = host_version
        self._factory = factory
        self._environ = environ
        self.schema = build_schema(descriptions)
        self.resources: tuple[ResourceType, ...] = tuple(ResourceType)

    @property
    def host_version(self) -> str:
        return self._host_version or LEGACY_HOST_VERSION

    def configure(self, raw: Mapping[str, Any] | None = None) -> VersionRegistry:
        """Fill absent options from the environment, then configure."""
        try:
            options = apply_env_defaults(raw or {}, self._environ)
        except ValueError as exc:
            raise InvalidConfigError(str(exc)) from exc
        return configure(options, factory=self._factory, host_version=self.host_version)

    def configure_from_file(self, path: str | Path) -> VersionRegistry:
        """Configure from provider options written in a YAML file.

        Raises:
            FileNotFoundError: *path* does not exist.
            InvalidConfigError: the file is not a YAML mapping of options.
        """
        try:
            options = read_provider_file(path, self._environ)
        except (ValueError, TypeError) as exc:
            raise InvalidConfigError(str(exc)) from exc
        return self.configure(options)
