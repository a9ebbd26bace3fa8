"""HTTP API of the inventory service."""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from flask import Flask, Response, g, request

from shopfront.database import NotFoundError
from shopfront.inventory.service import InventoryService

_decoder = json.JSONDecoder()


@dataclass
class AddProductRequest:
    """Body of a request to add a product."""

    name: str = ""
    price: float = 0.0
    stock_quantity: int = 0

    @staticmethod
    def from_dict(data: Any) -> AddProductRequest:
        """Build a request from decoded JSON; raise ValueError on wrong types."""
        if data is None:
            return AddProductRequest()
        if not isinstance(data, Mapping):
            raise ValueError("request body must be a JSON object")
        name = data.get("name")
        if name is None:
            name = ""
        elif not isinstance(name, str):
            raise ValueError("name must be a string")
        price = data.get("price")
        if price is None:
            price = 0.0
        elif isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValueError("price must be a number")
        quantity = data.get("stockQuantity")
        if quantity is None:
            quantity = 0
        elif isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError("stockQuantity must be an integer")
        return AddProductRequest(name=name, price=float(price), stock_quantity=quantity)


def _decode_body(body: bytes) -> Any:
    text = body.decode("utf-8").lstrip()
    value, _ = _decoder.raw_decode(text)
    return value


def _error(message: str, status: int) -> Response:
    response = Response(message + "\n", status=status, mimetype="text/plain")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def _json(payload: Any, status: int) -> Response:
    return Response(json.dumps(payload) + "\n", status=status, mimetype="application/json")


def create_app(service: InventoryService, logger: logging.Logger | None = None) -> Flask:
    """Return the WSGI application serving the /products routes."""
    log = logger or logging.getLogger(__name__)
    app = Flask(__name__)

    @app.before_request
    def _assign_request_id() -> None:
        g.request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex

    def extra(**fields: Any) -> dict[str, Any]:
        return {"component": "inventory_handler", "request_id": g.request_id, **fields}

    @app.post("/products/", strict_slashes=False)
    def add_product() -> Response:
        log.info("Processing new add product request", extra=extra())
        try:
            req = AddProductRequest.from_dict(_decode_body(request.get_data()))
        except ValueError:
            log.error("Invalid request body", extra=extra())
            return _error("Invalid request body", 400)

        if not req.name or req.price == 0.0 or req.stock_quantity == 0:
            log.error("Invalid request body", extra=extra(request_fields=repr(req)))
            return _error("Invalid request body", 400)

        try:
            product = service.add_product(req.name, req.price, req.stock_quantity, g.request_id)
        except Exception as exc:
            log.error("Error creating product", extra=extra(error=str(exc)))
            return _error("Error creating product", 500)

        log.info("Product created successfully", extra=extra(product_id=product.id))
        return _json(product.to_dict(), 202)

    @app.get("/products/<product_id>")
    def get_price(product_id: str) -> Response:
        log.info("Getting price for given product id", extra=extra(product_id=product_id))
        try:
            price = service.get_price(product_id, g.request_id)
        except NotFoundError as exc:
            log.error("Product with given id not found", extra=extra(error=str(exc)))
            return _error("Error creating product", 404)
        except Exception as exc:
            log.error("Error fetching price", extra=extra(error=str(exc)))
            return _error("Error fetching price", 500)

        log.info("Got price for given product id", extra=extra(price=price))
        return _json({"productId": product_id, "price": price}, 200)

    return app