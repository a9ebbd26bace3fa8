"""Order business logic."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Protocol

from shopfront.inventory.rpc import GetProductInfoResponse
from shopfront.order.model import Order, OrderItem
from shopfront.order.repository import OrderRepository


class NoPriceError(LookupError):
    """Raised when the inventory has no price for an ordered product."""

    def __init__(self, message: str = "Price not found for one of the items"):
        super().__init__(message)


class _InventoryClient(Protocol):
    def get_product_info(self, product_ids: list[str]) -> GetProductInfoResponse: ...


class OrderService:
    """Creates orders priced by the inventory service and looks them up."""

    def __init__(
        self,
        repository: OrderRepository,
        logger: logging.Logger | None = None,
        inventory_client: _InventoryClient | None = None,
    ):
        self._repository = repository
        self._logger = logger or logging.getLogger(__name__)
        self._inventory_client = inventory_client

    def _extra(self, request_id: str | None, **fields: Any) -> dict[str, Any]:
        return {"component": "order_service", "request_id": request_id, **fields}

    def create_order(
        self, user_id: str, items: Iterable[OrderItem], request_id: str | None = None
    ) -> Order:
        """Price ``items`` from the inventory, store a PENDING order and return it.

        Each item gets its unit price filled in. Raises NoPriceError when a
        product has no price.
        """
        items = list(items)
        extra = self._extra(request_id, user_id=user_id, product_ids=[i.product_id for i in items])
        self._logger.info("CreateOrder started", extra=extra)

        if self._inventory_client is None:
            raise RuntimeError("no inventory client configured")
        try:
            response = self._inventory_client.get_product_info([i.product_id for i in items])
        except Exception as exc:
            self._logger.error(
                "Failed to fetch product info from grpc server", extra={**extra, "error": str(exc)}
            )
            raise

        prices = {info.id: info.price for info in response.products}
        total_price = 0.0
        for item in items:
            price = prices.get(item.product_id)
            if price is None:
                self._logger.error(
                    "Could not fetch the price for product",
                    extra={**extra, "product_id": item.product_id},
                )
                raise NoPriceError()
            item.price = price
            total_price += price * item.quantity

        order = Order(
            user_id=user_id,
            items=json.dumps([item.to_dict() for item in items], separators=(",", ":")),
            total_price=total_price,
            status="PENDING",
        )
        self._logger.info(
            "Set total price and status",
            extra={**extra, "total_price": order.total_price, "status": order.status},
        )
        try:
            order = self._repository.create(order, request_id)
        except Exception:
            self._logger.error("CreateOrder failed", extra=extra)
            raise
        self._logger.info("CreateOrder completed successfully", extra={**extra, "order_id": order.id})
        return order

    def get_order_by_id(self, order_id: str, request_id: str | None = None) -> Order:
        """Return the stored order; NotFoundError if there is none."""
        extra = self._extra(request_id, order_id=order_id)
        self._logger.info("GetOrderByID started", extra=extra)
        order = self._repository.find_by_id(order_id, request_id)
        self._logger.info("GetOrderByID completed successfully", extra=extra)
        return order