from __future__ import annotations

import httpx
import pytest

from topicsync.core.config import Settings
from topicsync.infra.kafka.admin import admin_session
from topicsync.infra.upstash.api import UpstashApi


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        kafka_bootstrap="broker-1:9092,broker-2:9092",
        origin="origin",
        group_id="orders-service",
        upstash_token="secret-token",
        upstash_cluster_id="cluster-1",
    )


@pytest.fixture
def session_for(settings):
    """Build an admin session factory bound to a fake admin client."""

    def _factory(client):
        return lambda: admin_session(settings, client_factory=lambda **kw: client)

    return _factory


@pytest.fixture
def api_for(settings):
    """Build an UpstashApi factory served by a MockTransport handler."""

    def _factory(handler):
        return lambda: UpstashApi(settings, transport=httpx.MockTransport(handler))

    return _factory
