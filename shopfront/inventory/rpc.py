"""Product info lookups of the inventory service over gRPC."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

import grpc

from shopfront.database import NotFoundError
from shopfront.inventory.service import InventoryService

SERVICE_NAME = "inventory.InventoryService"
_METHOD = "GetProductInfo"


@dataclass
class ProductInfo:
    """Product data shared with other services."""

    id: str = ""
    name: str = ""
    price: float = 0.0


@dataclass
class GetProductInfoResponse:
    """Answer to a product info request."""

    products: list[ProductInfo] = field(default_factory=list)


def _dumps(value: Any) -> bytes:
    return json.dumps(value).encode("utf-8")


def _loads(payload: bytes) -> dict[str, Any]:
    return json.loads(payload or b"{}")


class InventoryRpcServer:
    """Answers product info requests from the inventory service."""

    def __init__(self, service: InventoryService):
        self._service = service

    def get_product_info(self, product_ids: list[str]) -> GetProductInfoResponse:
        """Return id, name and price of every requested product."""
        products = self._service.get_products_by_ids(product_ids)
        return GetProductInfoResponse([ProductInfo(p.id, p.name, p.price) for p in products])


def add_inventory_servicer(server: grpc.Server, servicer: Any) -> None:
    """Register ``servicer`` on a gRPC ``server`` under the inventory service name."""

    def handle(product_ids: list[str], context: grpc.ServicerContext) -> GetProductInfoResponse:
        try:
            return servicer.get_product_info(product_ids)
        except NotFoundError as exc:
            context.abort(grpc.StatusCode.NOT_FOUND, str(exc))
        except Exception as exc:
            context.abort(grpc.StatusCode.UNKNOWN, str(exc))

    method = grpc.unary_unary_rpc_method_handler(
        handle,
        request_deserializer=lambda data: [str(i) for i in _loads(data).get("productIds") or []],
        response_serializer=lambda response: _dumps(asdict(response)),
    )
    server.add_generic_rpc_handlers(
        (grpc.method_handlers_generic_handler(SERVICE_NAME, {_METHOD: method}),)
    )


class InventoryRpcClient:
    """Client side of the inventory product info call."""

    def __init__(self, channel: grpc.Channel):
        self._call = channel.unary_unary(
            f"/{SERVICE_NAME}/{_METHOD}",
            request_serializer=lambda ids: _dumps({"productIds": ids}),
            response_deserializer=lambda data: GetProductInfoResponse(
                [
                    ProductInfo(p.get("id", ""), p.get("name", ""), float(p.get("price", 0.0)))
                    for p in _loads(data).get("products") or []
                ]
            ),
        )

    def get_product_info(self, product_ids: list[str]) -> GetProductInfoResponse:
        """Ask the inventory service for the given products; raises grpc.RpcError on failure."""
        return self._call(list(product_ids))