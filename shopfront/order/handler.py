"""HTTP API of the order service."""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from flask import Flask, Response, g, request

from shopfront.database import NotFoundError
from shopfront.order.model import OrderItem
from shopfront.order.service import OrderService


@dataclass
class CreateOrderRequest:
    """Body of a request to create an order."""

    user_id: str = ""
    items: list[OrderItem] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Any) -> CreateOrderRequest:
        """Build a request from decoded JSON; raise ValueError on wrong types."""
        data = {} if data is None else data
        if not isinstance(data, Mapping):
            raise ValueError("request body must be a JSON object")
        user_id = data.get("userId") or ""
        items = data.get("items") or []
        if not isinstance(user_id, str) or not isinstance(items, list):
            raise ValueError("userId must be a string and items an array")
        return CreateOrderRequest(
            user_id, [OrderItem() if i is None else OrderItem.from_dict(i) for i in items]
        )


def _error(message: str, status: int) -> Response:
    response = Response(message + "\n", status=status, mimetype="text/plain")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def create_app(service: OrderService, logger: logging.Logger | None = None) -> Flask:
    """Return the WSGI application serving the /orders routes."""
    log = logger or logging.getLogger(__name__)
    app = Flask(__name__)

    @app.before_request
    def _assign_request_id() -> None:
        g.request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex

    def extra(**fields: Any) -> dict[str, Any]:
        return {"request_id": g.request_id, **fields}

    @app.post("/orders/", strict_slashes=False)
    def create_order() -> Response:
        log.info("Processing new order request", extra=extra())
        try:
            body = request.get_data().decode("utf-8").lstrip()
            req = CreateOrderRequest.from_dict(json.JSONDecoder().raw_decode(body)[0])
        except ValueError:
            log.error("Invalid request body", extra=extra())
            return _error("Invalid request body", 400)
        try:
            order = service.create_order(req.user_id, req.items, g.request_id)
        except Exception:
            log.error("Error creating order", extra=extra())
            return _error("Error creating order", 500)
        log.info("Order created successfully", extra=extra(order_id=order.id))
        return Response(json.dumps(order.to_dict()) + "\n", 202, mimetype="application/json")

    @app.get("/orders/<order_id>")
    def get_order_by_id(order_id: str) -> Response:
        log.info("Retrieving order by id", extra=extra(order_id=order_id, path=request.path))
        try:
            order = service.get_order_by_id(order_id, g.request_id)
        except NotFoundError:
            return _error("No order with given id", 404)
        except Exception:
            return _error("Database error", 500)
        return Response(json.dumps(order.to_dict()) + "\n", 200, mimetype="application/json")

    return app