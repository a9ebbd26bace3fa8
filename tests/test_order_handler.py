import pytest

from shopfront.database import init_db
from shopfront.inventory.rpc import GetProductInfoResponse, ProductInfo
from shopfront.order.handler import CreateOrderRequest, create_app
from shopfront.order.model import OrderItem
from shopfront.order.repository import SqlOrderRepository
from shopfront.order.service import OrderService


class FakeInventoryClient:
    def __init__(self, prices):
        self.prices = prices

    def get_product_info(self, product_ids):
        return GetProductInfoResponse(
            products=[
                ProductInfo(id=pid, name=pid, price=self.prices[pid])
                for pid in product_ids
                if pid in self.prices
            ]
        )


class BrokenService:
    def create_order(self, user_id, items, request_id=None):
        raise RuntimeError("db down")

    def get_order_by_id(self, order_id, request_id=None):
        raise RuntimeError("db down")


@pytest.fixture
def client():
    connection = init_db(":memory:")
    service = OrderService(SqlOrderRepository(connection), None, FakeInventoryClient({"p1": 4.0}))
    yield create_app(service).test_client()
    connection.close()


def test_create_order(client):
    resp = client.post("/orders/", json={"userId": "user-1", "items": [{"productId": "p1", "quantity": 1}]})
    assert resp.status_code == 202
    body = resp.get_json()
    assert body["status"] == "PENDING"
    assert body["userId"] == "user-1"
    assert body["totalPrice"] == 4.0
    assert body["items"] == [{"productId": "p1", "quantity": 1, "price": 4.0}]


def test_created_order_can_be_fetched(client):
    created = client.post("/orders", json={"userId": "u", "items": [{"productId": "p1", "quantity": 1}]})
    order = created.get_json()
    resp = client.get(f"/orders/{order['id']}")
    assert resp.status_code == 200
    assert resp.get_json() == order


@pytest.mark.parametrize(
    "payload",
    [{"userId": 5}, {"userId": "u", "items": "p1"}, {"userId": "u", "items": [{"quantity": "2"}]}, "text"],
)
def test_create_order_rejects_invalid_bodies(client, payload):
    resp = client.post("/orders/", json=payload)
    assert resp.status_code == 400
    assert resp.get_data(as_text=True) == "Invalid request body\n"


def test_create_order_rejects_malformed_json(client):
    resp = client.post("/orders/", data="{", content_type="application/json")
    assert resp.status_code == 400


def test_create_order_without_price_fails(client):
    resp = client.post("/orders/", json={"userId": "u", "items": [{"productId": "nope", "quantity": 1}]})
    assert resp.status_code == 500
    assert resp.get_data(as_text=True) == "Error creating order\n"


def test_get_unknown_order(client):
    resp = client.get("/orders/missing")
    assert resp.status_code == 404
    assert resp.get_data(as_text=True) == "No order with given id\n"


def test_get_order_database_error():
    resp = create_app(BrokenService()).test_client().get("/orders/x")
    assert resp.status_code == 500
    assert resp.get_data(as_text=True) == "Database error\n"


def test_request_from_dict():
    req = CreateOrderRequest.from_dict({"userId": "u", "items": [{"productId": "p1", "quantity": 3}, None]})
    assert req == CreateOrderRequest("u", [OrderItem("p1", 3), OrderItem()])