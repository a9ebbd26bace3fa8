import json
from datetime import datetime, timezone

from shopfront.inventory.model import Product


def test_to_dict_uses_json_field_names():
    product = Product(id="p1", name="Lamp", price=12.5, stock_quantity=4)
    assert set(product.to_dict()) == {
        "id",
        "name",
        "price",
        "stockQuantity",
        "createdAt",
        "updatedAt",
    }


def test_to_dict_values():
    stamp = datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)
    product = Product(
        id="p1",
        name="Lamp",
        price=12.5,
        stock_quantity=4,
        created_at=stamp,
        updated_at=stamp,
    )
    data = product.to_dict()
    assert data["id"] == "p1"
    assert data["name"] == "Lamp"
    assert data["price"] == 12.5
    assert data["stockQuantity"] == 4
    assert data["createdAt"] == stamp.isoformat()
    assert datetime.fromisoformat(data["updatedAt"]) == stamp


def test_to_dict_without_timestamps_is_json_serialisable():
    data = Product(name="Cup", price=3.0, stock_quantity=1).to_dict()
    assert data["createdAt"] is None
    assert json.loads(json.dumps(data)) == data