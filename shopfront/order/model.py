"""Order domain model."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _field(data: Mapping, key: str, types: tuple[type, ...], default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, types):
        raise ValueError(f"{key} has the wrong type")
    return value


@dataclass
class OrderItem:
    """One line of an order."""

    product_id: str = ""
    quantity: int = 0
    price: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation; ``price`` is left out when unset."""
        data: dict[str, Any] = {"productId": self.product_id, "quantity": self.quantity}
        if self.price is not None:
            data["price"] = self.price
        return data

    @staticmethod
    def from_dict(data: Any) -> OrderItem:
        """Build an item from decoded JSON; raise ValueError on wrong types."""
        if not isinstance(data, Mapping):
            raise ValueError("order item must be a JSON object")
        price = _field(data, "price", (int, float), None)
        return OrderItem(
            _field(data, "productId", (str,), ""),
            _field(data, "quantity", (int,), 0),
            None if price is None else float(price),
        )


@dataclass
class Order:
    """A customer order; ``items`` holds the item list as JSON text."""

    id: str = ""
    user_id: str = ""
    items: str = ""
    total_price: float = 0.0
    status: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation, with ``items`` embedded as decoded JSON."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "items": json.loads(self.items) if self.items else None,
            "totalPrice": self.total_price,
            "status": self.status,
            "createdAt": self.created_at and self.created_at.isoformat(),
            "updatedAt": self.updated_at and self.updated_at.isoformat(),
        }