"""Unit tests for the provider configuration entry point."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from pulsar_provider.admin.client import PulsarAdminClient
from pulsar_provider.config.descriptions import DESCRIPTIONS
from pulsar_provider.config.models import (
    SUPPORTED_API_VERSIONS,
    APIVersion,
    ProviderConfig,
)
from pulsar_provider.errors import (
    ClientConstructionError,
    InvalidConfigError,
    InvalidEndpointError,
)
from pulsar_provider.provider import LEGACY_HOST_VERSION, Provider, configure
from pulsar_provider.resources import ResourceType

from .helpers import ENDPOINT, CountingFactory


class TestConfigure:
    @pytest.mark.asyncio
    async def test_builds_registry_with_real_clients(self):
        registry = configure({"endpoint": ENDPOINT, "token": ""})
        async with registry:
            assert len(registry) == 3
            client = registry.lookup(APIVersion.V2)
            assert isinstance(client, PulsarAdminClient)
            assert client.config.web_service_url == ENDPOINT
            assert client.version is APIVersion.V2

    @pytest.mark.parametrize("endpoint", ["not a url", "", None, "ftp//broken"])
    def test_invalid_endpoint_constructs_nothing(
        self, factory: CountingFactory, endpoint: str | None
    ):
        with pytest.raises(InvalidEndpointError):
            configure({"endpoint": endpoint}, factory=factory)
        assert factory.calls == []

    def test_missing_endpoint(self, factory: CountingFactory):
        with pytest.raises(InvalidEndpointError, match="required"):
            configure({}, factory=factory)
        assert factory.calls == []

    def test_web_service_url_accepted(self, factory: CountingFactory):
        registry = configure({"web_service_url": ENDPOINT}, factory=factory)
        assert registry.lookup(APIVersion.V1).config.web_service_url == ENDPOINT

    def test_one_client_per_version(self, factory: CountingFactory):
        registry = configure({"endpoint": ENDPOINT}, factory=factory)
        assert factory.calls == list(SUPPORTED_API_VERSIONS)
        assert set(registry) == set(SUPPORTED_API_VERSIONS)
        assert len({id(c) for c in registry.values()}) == 3

    def test_defaults_applied(self, factory: CountingFactory):
        registry = configure({"endpoint": ENDPOINT}, factory=factory)
        config = registry.lookup(APIVersion.V1).config
        assert config.token.get_secret_value() == ""
        assert config.tls_trust_certs_file_path == ""
        assert config.tls_allow_insecure_connection is False

    def test_same_config_shared_by_every_version(self, factory: CountingFactory):
        registry = configure(
            {
                "endpoint": ENDPOINT,
                "token": "tok",
                "tls_trust_certs_file_path": "/ca.pem",
                "tls_allow_insecure_connection": True,
            },
            factory=factory,
        )
        configs = {id(c.config) for c in registry.values()}
        assert len(configs) == 1
        config = registry.lookup(APIVersion.V3).config
        assert config.token.get_secret_value() == "tok"
        assert config.tls_trust_certs_file_path == "/ca.pem"
        assert config.tls_allow_insecure_connection is True

    def test_accepts_provider_config(self, factory: CountingFactory):
        registry = configure(ProviderConfig(endpoint=ENDPOINT), factory=factory)
        assert len(registry) == 3

    def test_provider_config_with_bad_endpoint(self, factory: CountingFactory):
        with pytest.raises(InvalidEndpointError):
            configure(ProviderConfig(endpoint="not a url"), factory=factory)
        assert factory.calls == []

    def test_ill_typed_option_constructs_nothing(self, factory: CountingFactory):
        with pytest.raises(InvalidConfigError, match="tls_allow_insecure_connection"):
            configure(
                {"endpoint": ENDPOINT, "tls_allow_insecure_connection": "sometimes"},
                factory=factory,
            )
        assert factory.calls == []

    def test_unknown_option_constructs_nothing(self, factory: CountingFactory):
        with pytest.raises(InvalidConfigError, match="tls_allow_insecure_conection"):
            configure(
                {"endpoint": ENDPOINT, "tls_allow_insecure_conection": True},
                factory=factory,
            )
        assert factory.calls == []

    @pytest.mark.parametrize("failing", list(SUPPORTED_API_VERSIONS))
    def test_construction_failure_yields_no_registry(self, failing: APIVersion):
        factory = CountingFactory(fail_on=failing)
        registry = None
        with pytest.raises(ClientConstructionError) as info:
            registry = configure({"endpoint": ENDPOINT}, factory=factory)
        assert registry is None
        assert info.value.version is failing

    def test_missing_trust_bundle_fails_whole_pass(self, tmp_path: Path):
        with pytest.raises(ClientConstructionError) as info:
            configure(
                {
                    "endpoint": ENDPOINT,
                    "tls_trust_certs_file_path": str(tmp_path / "missing.pem"),
                }
            )
        # Every version shares the bundle, so the first one fails.
        assert info.value.version is APIVersion.V1

    def test_independent_invocations_do_not_share_clients(self):
        first_factory, second_factory = CountingFactory(), CountingFactory()
        first = configure({"endpoint": ENDPOINT, "token": "t"}, factory=first_factory)
        second = configure({"endpoint": ENDPOINT, "token": "t"}, factory=second_factory)
        for version in SUPPORTED_API_VERSIONS:
            assert first.lookup(version) is not second.lookup(version)
            assert first.lookup(version).config == second.lookup(version).config

    def test_deprecated_api_version_warns(self, factory: CountingFactory):
        with capture_logs() as logs:
            registry = configure(
                {"endpoint": ENDPOINT, "api_version": "3"}, factory=factory
            )
        assert len(registry) == 3
        events = [e for e in logs if e["event"] == "provider.api_version_deprecated"]
        assert events and events[0]["log_level"] == "warning"

    @pytest.mark.parametrize("api_version", [None, "1"])
    def test_default_api_version_is_silent(
        self, factory: CountingFactory, api_version: str | None
    ):
        with capture_logs() as logs:
            configure({"endpoint": ENDPOINT, "api_version": api_version}, factory=factory)
        assert not [e for e in logs if e["event"] == "provider.api_version_deprecated"]

    def test_token_never_logged(self, factory: CountingFactory):
        with capture_logs() as logs:
            configure({"endpoint": ENDPOINT, "token": "s3cr3t"}, factory=factory)
        assert "s3cr3t" not in repr(logs)
        configured = [e for e in logs if e["event"] == "provider.configured"]
        assert configured[0]["authenticated"] is True


class TestProvider:
    def test_schema_describes_options(self):
        schema = Provider().schema
        assert set(schema) == {
            "endpoint",
            "token",
            "api_version",
            "tls_trust_certs_file_path",
            "tls_allow_insecure_connection",
        }
        assert schema["endpoint"].required is True
        assert schema["endpoint"].env_var == "WEB_SERVICE_URL"
        assert schema["endpoint"].description == DESCRIPTIONS["endpoint"]
        assert schema["api_version"].deprecated
        assert schema["tls_allow_insecure_connection"].type is bool
        assert schema["tls_allow_insecure_connection"].default is False

    def test_resources(self):
        assert Provider().resources == tuple(ResourceType)

    def test_host_version_fallback(self):
        assert Provider().host_version == LEGACY_HOST_VERSION
        assert Provider(host_version="1.9.0").host_version == "1.9.0"

    def test_configure_reads_environment(self, factory: CountingFactory):
        provider = Provider(
            factory=factory,
            environ={"WEB_SERVICE_URL": ENDPOINT, "PULSAR_AUTH_TOKEN": "env-tok"},
        )
        registry = provider.configure()
        config = registry.lookup(APIVersion.V2).config
        assert config.web_service_url == ENDPOINT
        assert config.token.get_secret_value() == "env-tok"

    def test_explicit_options_override_environment(self, factory: CountingFactory):
        provider = Provider(factory=factory, environ={"WEB_SERVICE_URL": "not a url"})
        registry = provider.configure({"endpoint": ENDPOINT})
        assert registry.lookup(APIVersion.V1).config.web_service_url == ENDPOINT

    def test_bad_environment_bool(self, factory: CountingFactory):
        provider = Provider(
            factory=factory,
            environ={
                "WEB_SERVICE_URL": ENDPOINT,
                "TLS_ALLOW_INSECURE_CONNECTION": "sometimes",
            },
        )
        with pytest.raises(InvalidConfigError):
            provider.configure()
        assert factory.calls == []

    def test_configure_from_file(self, factory: CountingFactory, tmp_path: Path):
        path = tmp_path / "provider.yaml"
        path.write_text("provider:\n  endpoint: ${BROKER_URL}\n  token: file-tok\n")
        provider = Provider(factory=factory, environ={"BROKER_URL": ENDPOINT})
        registry = provider.configure_from_file(path)
        assert factory.calls == list(SUPPORTED_API_VERSIONS)
        config = registry.lookup(APIVersion.V3).config
        assert config.web_service_url == ENDPOINT
        assert config.token.get_secret_value() == "file-tok"

    def test_configure_from_file_uses_environment_defaults(
        self, factory: CountingFactory, tmp_path: Path
    ):
        path = tmp_path / "provider.yaml"
        path.write_text("tls_allow_insecure_connection: true\n")
        provider = Provider(factory=factory, environ={"WEB_SERVICE_URL": ENDPOINT})
        registry = provider.configure_from_file(path)
        config = registry.lookup(APIVersion.V1).config
        assert config.web_service_url == ENDPOINT
        assert config.tls_allow_insecure_connection is True

    def test_configure_from_malformed_file(self, factory: CountingFactory, tmp_path: Path):
        path = tmp_path / "provider.yaml"
        path.write_text("- endpoint\n")
        with pytest.raises(InvalidConfigError, match="mapping"):
            Provider(factory=factory, environ={}).configure_from_file(path)
        assert factory.calls == []

    def test_configure_from_missing_file(self, factory: CountingFactory, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Provider(factory=factory, environ={}).configure_from_file(tmp_path / "nope.yaml")
        assert factory.calls == []
