"""Pre-flight validation of the raw web service URL."""

from __future__ import annotations

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from pulsar_provider.errors import InvalidEndpointError

_ENDPOINT = TypeAdapter(AnyHttpUrl)


def validate_endpoint(raw: object) -> str:
    """Check that *raw* is an absolute http(s) URL and return it unchanged.

    Raises :class:`InvalidEndpointError` carrying the parser diagnostic.
    Performs no I/O.
    """
    if raw is None or raw == "":
        msg = "endpoint is required"
        raise InvalidEndpointError(raw, msg)
    try:
        _ENDPOINT.validate_python(raw)
    except ValidationError as exc:
        detail = "; ".join(err["msg"] for err in exc.errors())
        raise InvalidEndpointError(raw, detail) from exc
    return str(raw)
