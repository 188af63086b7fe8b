"""
Order Service Tests
"""

import pytest
from fastapi.testclient import TestClient

from services.order_service.config import OrderServiceSettings
from services.order_service.main import create_app
from services.order_service.store import OrderStore, OrderStoreFullError
from shared.schemas import OrderCreateSchema


@pytest.fixture
def client():
    with TestClient(create_app(OrderServiceSettings())) as client:
        yield client


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "Order Service is healthy"}


def test_orders_start_empty(client):
    response = client.get("/orders")
    assert response.status_code == 200
    assert response.json() == []


def test_create_order(client):
    response = client.post("/orders", json={"user_id": 1, "product_id": 2, "quantity": 2})
    assert response.status_code == 201
    assert response.json() == {"id": 1, "user_id": 1, "product_id": 2, "quantity": 2}

    second = client.post("/orders", json={"user_id": 2, "product_id": 1})
    assert second.json()["id"] == 2
    assert second.json()["quantity"] == 1

    listed = client.get("/orders").json()
    assert [o["id"] for o in listed] == [1, 2]


@pytest.mark.parametrize(
    "body",
    [
        {"product_id": 1},
        {"user_id": 1, "product_id": 1, "quantity": 0},
        {"user_id": "abc", "product_id": 1},
    ],
)
def test_create_order_validation(client, body):
    response = client.post("/orders", json=body)
    assert response.status_code == 422
    assert client.get("/orders").json() == []


def test_store_is_per_app():
    first = TestClient(create_app(OrderServiceSettings()))
    second = TestClient(create_app(OrderServiceSettings()))

    first.post("/orders", json={"user_id": 1, "product_id": 1})

    assert len(first.get("/orders").json()) == 1
    assert second.get("/orders").json() == []


def test_full_store_rejects_orders():
    client = TestClient(create_app(OrderServiceSettings(max_orders=1)))

    assert client.post("/orders", json={"user_id": 1, "product_id": 1}).status_code == 201
    response = client.post("/orders", json={"user_id": 1, "product_id": 1})

    assert response.status_code == 507
    assert response.json()["error"] is True


class TestOrderStore:
    def test_ids_are_sequential(self):
        store = OrderStore()
        a = store.add(OrderCreateSchema(user_id=1, product_id=1))
        b = store.add(OrderCreateSchema(user_id=1, product_id=2))
        assert (a.id, b.id) == (1, 2)
        assert len(store) == 2

    def test_list_returns_copy(self):
        store = OrderStore()
        store.add(OrderCreateSchema(user_id=1, product_id=1))
        store.list().clear()
        assert len(store) == 1

    def test_capacity(self):
        store = OrderStore(capacity=1)
        store.add(OrderCreateSchema(user_id=1, product_id=1))
        with pytest.raises(OrderStoreFullError):
            store.add(OrderCreateSchema(user_id=1, product_id=1))
