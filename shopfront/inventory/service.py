"""Inventory business logic."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from shopfront.database import NotFoundError
from shopfront.inventory.model import Product
from shopfront.inventory.repository import InventoryRepository


class InventoryService:
    """Adds products and answers price and product lookups."""

    def __init__(self, repository: InventoryRepository, logger: logging.Logger | None = None):
        self._repository = repository
        self._logger = logger or logging.getLogger(__name__)

    def _extra(self, request_id: str | None, **fields: Any) -> dict[str, Any]:
        return {"component": "inventory_service", "request_id": request_id, **fields}

    def get_products_by_ids(
        self, ids: Iterable[str], request_id: str | None = None
    ) -> list[Product]:
        """Return the products with the given ids, in the same order."""
        ids = list(ids)
        extra = self._extra(request_id, product_ids=ids)
        self._logger.info("GetProductsByIDs started", extra=extra)
        try:
            products = self._repository.find_many_by_ids(ids, request_id)
        except Exception as exc:
            self._logger.error("Could not get product", extra={**extra, "error": str(exc)})
            raise
        self._logger.info("GetProductsByIDs successful", extra=extra)
        return products

    def get_price(self, product_id: str, request_id: str | None = None) -> float:
        """Return the price of a product; NotFoundError if it does not exist."""
        extra = self._extra(request_id, product_id=product_id)
        self._logger.info("GetPrice started", extra=extra)
        try:
            product = self._repository.find_by_id(product_id, request_id)
        except NotFoundError:
            self._logger.error("Product with given id could not be found", extra=extra)
            raise
        except Exception as exc:
            self._logger.error("Could not get product", extra={**extra, "error": str(exc)})
            raise
        self._logger.info("GetPrice successful", extra={**extra, "price": product.price})
        return product.price

    def add_product(
        self, name: str, price: float, quantity: int, request_id: str | None = None
    ) -> Product:
        """Store a new product and return it with its id and timestamps."""
        extra = self._extra(request_id, product_name=name, price=price, quantity=quantity)
        self._logger.info("AddProduct started", extra=extra)
        product = self._repository.create(
            Product(name=name, price=price, stock_quantity=quantity), request_id
        )
        self._logger.info("AddProduct completed successfully", extra={**extra, "product_id": product.id})
        return product