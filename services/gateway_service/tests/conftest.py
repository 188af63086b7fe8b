"""
Pytest fixtures for gateway service tests
"""

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from services.gateway_service.config import GatewaySettings
from services.gateway_service.main import create_app
from services.gateway_service.utils.upstream_client import UpstreamClient
from services.gateway_service.tests.fakes import ORDER_URL, PRODUCT_URL, USER_URL, healthy_backends


@pytest.fixture
def gateway_settings() -> GatewaySettings:
    return GatewaySettings(
        user_service_url=USER_URL,
        product_service_url=PRODUCT_URL,
        order_service_url=ORDER_URL,
        upstream_timeout=1.0,
        upstream_connect_timeout=0.5,
        upstream_retries=1,
        health_probe_timeout=0.5,
    )


@pytest.fixture
def make_client(gateway_settings) -> Callable[..., TestClient]:
    """Build a TestClient for a gateway whose backends are ``handler``"""
    clients = []

    def factory(handler=healthy_backends, settings: GatewaySettings = None) -> TestClient:
        settings = settings or gateway_settings
        upstream_client = UpstreamClient.from_settings(settings, transport=httpx.MockTransport(handler))
        client = TestClient(create_app(settings, upstream_client))
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
