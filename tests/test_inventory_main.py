import logging
import sqlite3

import pytest

from shopfront.inventory.main import build_app, main


@pytest.fixture
def client():
    app = build_app(":memory:", logging.getLogger("test.inventory"))
    return app.test_client()


def _add(client, name="Widget", price=9.5, quantity=3):
    return client.post(
        "/products/", json={"name": name, "price": price, "stockQuantity": quantity}
    )


def test_add_product_is_accepted_and_returned(client):
    response = _add(client)
    assert response.status_code == 202
    body = response.get_json()
    assert body["name"] == "Widget"
    assert body["price"] == 9.5
    assert body["stockQuantity"] == 3
    assert body["id"]
    assert body["createdAt"] == body["updatedAt"]


def test_price_of_added_product_round_trips(client):
    product_id = _add(client, price=12.25).get_json()["id"]
    response = client.get(f"/products/{product_id}")
    assert response.status_code == 200
    assert response.get_json() == {"productId": product_id, "price": 12.25}


def test_unknown_product_is_not_found(client):
    response = client.get("/products/does-not-exist")
    assert response.status_code == 404


def test_invalid_body_is_rejected(client):
    response = client.post("/products/", data=b"not json")
    assert response.status_code == 400
    assert response.get_data(as_text=True).strip() == "Invalid request body"


def test_each_app_has_its_own_database():
    first = build_app(":memory:").test_client()
    second = build_app(":memory:").test_client()
    product_id = _add(first).get_json()["id"]
    assert first.get(f"/products/{product_id}").status_code == 200
    assert second.get(f"/products/{product_id}").status_code == 404


def test_file_database_persists_between_apps(tmp_path):
    db_path = tmp_path / "inventory.db"
    product_id = _add(build_app(db_path).test_client(), price=3.0).get_json()["id"]
    response = build_app(db_path).test_client().get(f"/products/{product_id}")
    assert response.get_json()["price"] == 3.0


def test_main_fails_when_database_cannot_be_opened(tmp_path):
    bad_path = tmp_path / "missing" / "db.sqlite"
    with pytest.raises(sqlite3.OperationalError):
        main(["--db", str(bad_path), "--http-port", "0", "--grpc-port", "0"])