"""Storage of inventory products."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Protocol

from shopfront.database import NotFoundError
from shopfront.inventory.model import Product

_COLUMNS = "id, name, price, stock_quantity, created_at, updated_at"


class InventoryRepository(Protocol):
    """Persistence operations the inventory service relies on."""

    def create(self, product: Product, request_id: str | None = None) -> Product: ...

    def find_many_by_ids(
        self, ids: Iterable[str], request_id: str | None = None
    ) -> list[Product]: ...

    def find_by_id(self, product_id: str, request_id: str | None = None) -> Product: ...

    def update_stock_quantity(
        self, product_id: str, change: int, request_id: str | None = None
    ) -> None: ...


def _product_from_row(row: tuple) -> Product:
    return Product(
        id=row[0],
        name=row[1],
        price=float(row[2]),
        stock_quantity=int(row[3]),
        created_at=datetime.fromisoformat(row[4]),
        updated_at=datetime.fromisoformat(row[5]),
    )


class SqlInventoryRepository:
    """Inventory repository backed by an SQL connection."""

    def __init__(self, connection: sqlite3.Connection, logger: logging.Logger | None = None):
        try:
            connection.execute("SELECT 1")
        except sqlite3.Error as exc:
            raise ConnectionError(f"failed to connect to the database: {exc}") from exc
        self._connection = connection
        self._logger = logger or logging.getLogger(__name__)

    def _extra(self, request_id: str | None, **fields: Any) -> dict[str, Any]:
        return {"component": "inventory_repository", "request_id": request_id, **fields}

    def create(self, product: Product, request_id: str | None = None) -> Product:
        """Insert ``product``, filling in its id and timestamps."""
        self._logger.info("Create started", extra=self._extra(request_id, product_name=product.name))
        product_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        try:
            with self._connection:
                self._connection.execute(
                    "INSERT INTO products (id, name, price, stock_quantity, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        product_id,
                        product.name,
                        product.price,
                        product.stock_quantity,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
        except sqlite3.Error as exc:
            self._logger.error("Could not create product", extra=self._extra(request_id, error=str(exc)))
            raise
        product.id = product_id
        product.created_at = now
        product.updated_at = now
        self._logger.info("Create successful", extra=self._extra(request_id, product_id=product_id))
        return product

    def _fetch(self, product_id: str, request_id: str | None) -> Product:
        self._logger.info("Finding product", extra=self._extra(request_id, product_id=product_id))
        row = self._connection.execute(
            f"SELECT {_COLUMNS} FROM products WHERE id = ?", (product_id,)
        ).fetchone()
        if row is None:
            self._logger.error("Error finding product", extra=self._extra(request_id, product_id=product_id))
            raise NotFoundError(f"no product with id {product_id!r}")
        return _product_from_row(row)

    def find_by_id(self, product_id: str, request_id: str | None = None) -> Product:
        """Return the product with ``product_id`` or raise NotFoundError."""
        self._logger.info("FindByID started", extra=self._extra(request_id, product_id=product_id))
        product = self._fetch(product_id, request_id)
        self._logger.info("FindByID successful", extra=self._extra(request_id, product_id=product_id))
        return product

    def find_many_by_ids(
        self, ids: Iterable[str], request_id: str | None = None
    ) -> list[Product]:
        """Return the products for ``ids`` in order; any missing id raises NotFoundError."""
        ids = list(ids)
        self._logger.info("FindManyByIDs started", extra=self._extra(request_id, product_ids=ids))
        products = [self._fetch(product_id, request_id) for product_id in ids]
        self._logger.info("FindManyByIDs successful", extra=self._extra(request_id, product_ids=ids))
        return products

    def update_stock_quantity(
        self, product_id: str, change: int, request_id: str | None = None
    ) -> None:
        """Add ``change`` to the stock of a product."""
        self._logger.info(
            "UpdateStockQuantity started",
            extra=self._extra(request_id, product_id=product_id, stock_change=change),
        )
        try:
            with self._connection:
                cursor = self._connection.execute(
                    "UPDATE products SET stock_quantity = stock_quantity + ? WHERE id = ?",
                    (change, product_id),
                )
        except sqlite3.Error as exc:
            self._logger.info("Error updating stock quantity", extra=self._extra(request_id, error=str(exc)))
            raise
        if cursor.rowcount < 1:
            self._logger.error(
                "Could not find product with given id", extra=self._extra(request_id, product_id=product_id)
            )
            raise NotFoundError(f"no product with id {product_id!r}")
        self._logger.info("UpdateStockQuantity successful", extra=self._extra(request_id, product_id=product_id))