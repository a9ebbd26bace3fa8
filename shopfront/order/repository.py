"""Storage of orders."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from shopfront.database import NotFoundError
from shopfront.order.model import Order


class OrderRepository(Protocol):
    """Persistence operations the order service relies on."""

    def create(self, order: Order, request_id: str | None = None) -> Order: ...

    def find_by_id(self, order_id: str, request_id: str | None = None) -> Order: ...

    def update_status(
        self, order_id: str, new_status: str, request_id: str | None = None
    ) -> None: ...


class SqlOrderRepository:
    """Order repository backed by an SQL connection."""

    def __init__(self, connection: sqlite3.Connection, logger: logging.Logger | None = None):
        try:
            connection.execute("SELECT 1")
        except sqlite3.Error as exc:
            raise ConnectionError(f"failed to connect to the database: {exc}") from exc
        self._connection = connection
        self._logger = logger or logging.getLogger(__name__)

    def _extra(self, request_id: str | None, **fields: Any) -> dict[str, Any]:
        return {"component": "order_repository", "request_id": request_id, **fields}

    def create(self, order: Order, request_id: str | None = None) -> Order:
        """Insert ``order``, assigning it a new id and timestamps."""
        self._logger.info("Create started", extra=self._extra(request_id, user_id=order.user_id))
        order_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        self._logger.info("UUID generated for order", extra=self._extra(request_id, order_id=order_id))
        try:
            with self._connection:
                self._connection.execute(
                    "INSERT INTO orders (id, user_id, items, total_price, status, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        order_id,
                        order.user_id,
                        order.items,
                        order.total_price,
                        order.status,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
        except sqlite3.Error as exc:
            self._logger.error(
                "Could not create record in database",
                extra=self._extra(request_id, order_id=order_id, error=str(exc)),
            )
            raise
        order.id = order_id
        order.created_at = now
        order.updated_at = now
        self._logger.info("Create successful", extra=self._extra(request_id, order_id=order_id))
        return order

    def find_by_id(self, order_id: str, request_id: str | None = None) -> Order:
        """Return the order with ``order_id`` or raise NotFoundError."""
        self._logger.info("FindByID started", extra=self._extra(request_id, order_id=order_id))
        row = self._connection.execute(
            "SELECT id, user_id, items, total_price, status, created_at, updated_at "
            "FROM orders WHERE id = ?",
            (order_id,),
        ).fetchone()
        if row is None:
            self._logger.error("No order with given id", extra=self._extra(request_id, order_id=order_id))
            raise NotFoundError(f"no order with id {order_id!r}")
        order = Order(
            id=row[0],
            user_id=row[1],
            items=row[2],
            total_price=float(row[3]),
            status=row[4],
            created_at=datetime.fromisoformat(row[5]),
            updated_at=datetime.fromisoformat(row[6]),
        )
        self._logger.info("FindByID successful", extra=self._extra(request_id, order_id=order_id))
        return order

    def update_status(
        self, order_id: str, new_status: str, request_id: str | None = None
    ) -> None:
        """Set the status of an order; NotFoundError if there is no such order."""
        self._logger.info("UpdateStatus started", extra=self._extra(request_id, new_status=new_status))
        try:
            with self._connection:
                cursor = self._connection.execute(
                    "UPDATE orders SET status = ? WHERE id = ?", (new_status, order_id)
                )
        except sqlite3.Error as exc:
            self._logger.error("Could not update database", extra=self._extra(request_id, error=str(exc)))
            raise
        if cursor.rowcount == 0:
            self._logger.error("No order with given id found", extra=self._extra(request_id, order_id=order_id))
            raise NotFoundError(f"no order with id {order_id!r}")
        self._logger.info(
            "UpdateStatus successful",
            extra=self._extra(request_id, order_id=order_id, new_status=new_status),
        )