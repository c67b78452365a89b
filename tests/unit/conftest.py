"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from pulsar_provider.config.models import ConnectionConfig

from .helpers import ENDPOINT, CountingFactory


@pytest.fixture
def connection() -> ConnectionConfig:
    return ConnectionConfig(web_service_url=ENDPOINT)


@pytest.fixture
def factory() -> CountingFactory:
    return CountingFactory()
