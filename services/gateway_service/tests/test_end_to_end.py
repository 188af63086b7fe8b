"""
Gateway in front of the real backend applications, wired in-process
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from services.gateway_service.config import GatewaySettings
from services.gateway_service.main import create_app
from services.gateway_service.utils.upstream_client import UpstreamClient
from services.order_service.config import OrderServiceSettings
from services.order_service.main import create_app as create_order_app
from services.product_service.config import ProductServiceSettings
from services.product_service.main import create_app as create_product_app
from services.user_service.config import UserServiceSettings
from services.user_service.main import create_app as create_user_app


class ServiceNetwork(httpx.AsyncBaseTransport):
    """Routes requests by host to ASGI apps, like the compose network does"""

    def __init__(self, apps):
        self.transports = {host: httpx.ASGITransport(app=app) for host, app in apps.items()}
        self.stopped = set()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host in self.stopped or host not in self.transports:
            raise httpx.ConnectError(f"Could not resolve host: {host}", request=request)
        return await self.transports[host].handle_async_request(request)


@pytest.fixture
def order_app():
    return create_order_app(OrderServiceSettings())


@pytest.fixture
def network(order_app):
    return ServiceNetwork({
        "user-service": create_user_app(UserServiceSettings()),
        "product-service": create_product_app(ProductServiceSettings()),
        "order-service": order_app,
    })


@pytest.fixture
def gateway(network):
    settings = GatewaySettings(
        user_service_url="http://user-service:3000",
        product_service_url="http://product-service:3001",
        order_service_url="http://order-service:3002",
        upstream_timeout=1.0,
        upstream_connect_timeout=0.5,
    )
    upstream_client = UpstreamClient.from_settings(settings, transport=network)
    with TestClient(create_app(settings, upstream_client)) as client:
        yield client


def test_users_scenario(gateway, network):
    response = gateway.get("/api/users")
    assert response.status_code == 200
    assert response.json() == [{"id": 1, "name": "John Doe"}, {"id": 2, "name": "Jane Smith"}]

    network.stopped.add("user-service")
    assert gateway.get("/api/users").status_code in (502, 503)

    network.stopped.discard("user-service")
    response = gateway.get("/api/users")
    assert response.status_code == 200
    assert response.json() == [{"id": 1, "name": "John Doe"}, {"id": 2, "name": "Jane Smith"}]


def test_products_pass_through(gateway):
    response = gateway.get("/api/products")
    assert response.status_code == 200
    assert response.json() == [
        {"id": 1, "name": "Laptop", "price": 999.99},
        {"id": 2, "name": "Smartphone", "price": 699.99},
    ]


def test_orders_start_empty_and_reflect_backend_state(gateway, order_app):
    assert gateway.get("/api/orders").json() == []

    with TestClient(order_app) as orders:
        created = orders.post("/orders", json={"user_id": 1, "product_id": 2, "quantity": 3})
    assert created.status_code == 201

    response = gateway.get("/api/orders")
    assert response.status_code == 200
    assert response.json() == [{"id": 1, "user_id": 1, "product_id": 2, "quantity": 3}]


def test_order_service_stopped(gateway, network):
    network.stopped.add("order-service")

    response = gateway.get("/api/orders")

    assert response.status_code in (502, 503)
    assert gateway.get("/api/users").status_code == 200
    assert gateway.get("/health").status_code == 200


def test_upstream_health_reports_real_backends(gateway, network):
    network.stopped.add("product-service")

    data = gateway.get("/health/upstreams").json()

    assert data["status"] == "degraded"
    assert data["upstreams"] == {
        "users": "healthy",
        "products": "unreachable",
        "orders": "healthy",
    }
