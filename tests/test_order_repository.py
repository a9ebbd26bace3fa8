import json

import pytest

from shopfront.database import NotFoundError, init_db
from shopfront.order.model import Order, OrderItem
from shopfront.order.repository import SqlOrderRepository


@pytest.fixture
def repo():
    return SqlOrderRepository(init_db(":memory:"))


def _order():
    items = [OrderItem(product_id="p1", quantity=2, price=4.5).to_dict()]
    return Order(user_id="u1", items=json.dumps(items), total_price=9.0, status="PENDING")


def test_create_assigns_id_and_timestamps(repo):
    order = repo.create(_order(), "req-1")
    assert order.id
    assert order.created_at == order.updated_at
    assert order.created_at.tzinfo is not None


def test_create_then_find_round_trip(repo):
    order = repo.create(_order())
    assert repo.find_by_id(order.id) == order


def test_found_order_keeps_items(repo):
    original = _order()
    order = repo.create(original)
    found = repo.find_by_id(order.id)
    assert json.loads(found.items) == json.loads(original.items)


def test_create_generates_distinct_ids(repo):
    ids = {repo.create(_order()).id for _ in range(4)}
    assert len(ids) == 4


def test_find_missing_raises(repo):
    with pytest.raises(NotFoundError):
        repo.find_by_id("missing")


def test_update_status_changes_status(repo):
    order = repo.create(_order())
    repo.update_status(order.id, "CONFIRMED", "req-2")
    assert repo.find_by_id(order.id).status == "CONFIRMED"


def test_update_status_missing_raises(repo):
    with pytest.raises(NotFoundError):
        repo.update_status("missing", "CONFIRMED")


def test_closed_connection_is_rejected():
    connection = init_db(":memory:")
    connection.close()
    with pytest.raises(ConnectionError, match="failed to connect to the database"):
        SqlOrderRepository(connection)