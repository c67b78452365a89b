"""Environment-variable fallbacks for provider options."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

# Option name -> environment variable consulted when the option is absent.
ENV_DEFAULTS: Mapping[str, str] = {
    "endpoint": "WEB_SERVICE_URL",
    "token": "PULSAR_AUTH_TOKEN",
    "tls_trust_certs_file_path": "TLS_TRUST_CERTS_FILE_PATH",
    "tls_allow_insecure_connection": "TLS_ALLOW_INSECURE_CONNECTION",
}

_BOOL_OPTIONS = frozenset({"tls_allow_insecure_connection"})
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    msg = f"Environment variable '{name}' must be a boolean, got {value!r}"
    raise ValueError(msg)


def env_defaults(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect provider options from environment variables that are set."""
    env = os.environ if environ is None else environ
    found: dict[str, Any] = {}
    for option, var_name in ENV_DEFAULTS.items():
        value = env.get(var_name)
        if value is None:
            continue
        found[option] = _parse_bool(var_name, value) if option in _BOOL_OPTIONS else value
    return found


def apply_env_defaults(
    options: Mapping[str, Any], environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Fill options that are absent (or ``None``) from the environment.

    ``web_service_url`` counts as the endpoint option.
    """
    explicit = {k: v for k, v in options.items() if v is not None}
    if "web_service_url" in explicit and "endpoint" not in explicit:
        explicit["endpoint"] = explicit.pop("web_service_url")
    return {**env_defaults(environ), **explicit}
