"""Inventory domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class Product:
    """A product held in the inventory."""

    id: str = ""
    name: str = ""
    price: float = 0.0
    stock_quantity: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the product."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "stockQuantity": self.stock_quantity,
            "createdAt": self.created_at and self.created_at.isoformat(),
            "updatedAt": self.updated_at and self.updated_at.isoformat(),
        }