"""Read provider options from a YAML file."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pulsar_provider.config.defaults import apply_env_defaults
from pulsar_provider.config.models import ProviderConfig

# ${NAME} or ${NAME:-fallback}
_ENV_REF = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<fallback>[^}]*))?\}")


def expand_env(value: Any, environ: Mapping[str, str] | None = None) -> Any:
    """Substitute ``${NAME}`` references in every string inside *value*.

    Unset variables take their ``:-`` fallback; an unset variable without
    one is an error, so a token is never silently replaced by nothing.
    """
    env = os.environ if environ is None else environ

    def _lookup(match: re.Match[str]) -> str:
        name, fallback = match.group("name"), match.group("fallback")
        if name in env:
            return env[name]
        if fallback is None:
            msg = f"${{{name}}} is referenced but not set"
            raise ValueError(msg)
        return fallback

    if isinstance(value, str):
        return _ENV_REF.sub(_lookup, value)
    if isinstance(value, Mapping):
        return {key: expand_env(item, env) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item, env) for item in value]
    return value


def read_provider_file(
    path: str | Path, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Return the provider options written in *path*, env references expanded.

    The options may sit at the top level or under a ``provider`` key.
    """
    p = Path(path)
    if not p.is_file():
        msg = f"Provider config file not found: {p}"
        raise FileNotFoundError(msg)
    try:
        document = yaml.safe_load(p.read_text())
    except yaml.YAMLError as exc:
        where = ""
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            where = f" (line {mark.line + 1}, column {mark.column + 1})"
        msg = f"{p} is not valid YAML{where}: {exc}"
        raise ValueError(msg) from exc
    if isinstance(document, dict) and "provider" in document:
        document = document["provider"]
    if not isinstance(document, dict):
        msg = f"{p} must hold a mapping of provider options"
        raise TypeError(msg)
    return expand_env(document, environ)


def load_provider_options(
    path: str | Path, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Provider options from *path*, with gaps filled from the environment."""
    return apply_env_defaults(read_provider_file(path, environ), environ)


def load_provider_config(
    path: str | Path, environ: Mapping[str, str] | None = None
) -> ProviderConfig:
    """Load and type-check provider options from a YAML file."""
    options = load_provider_options(path, environ)
    try:
        return ProviderConfig.model_validate(options)
    except ValidationError as exc:
        msg = f"Invalid provider config ({path}):\n{exc}"
        raise ValueError(msg) from exc
