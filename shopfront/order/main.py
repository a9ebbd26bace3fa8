"""Entry point of the order service: HTTP API that prices orders via the inventory service."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from os import PathLike
from typing import Any

import grpc
from flask import Flask

from shopfront.database import init_db
from shopfront.inventory.rpc import InventoryRpcClient
from shopfront.order.handler import create_app
from shopfront.order.repository import SqlOrderRepository
from shopfront.order.service import OrderService

SERVICE = "order-service"
DEFAULT_DB_PATH = "ecommerce.db"
DEFAULT_HTTP_PORT = 8081


def build_app(
    db_path: str | PathLike[str], inventory_client: Any, logger: logging.Logger | None = None
) -> Flask:
    """Return the order HTTP application using ``inventory_client`` for product prices."""
    log = logger or logging.getLogger(__name__)
    connection = init_db(db_path)
    try:
        repository = SqlOrderRepository(connection, log)
    except Exception:
        connection.close()
        raise
    return create_app(OrderService(repository, log, inventory_client), log)


def main(argv: list[str] | None = None) -> int:
    """Run the order service until the HTTP server stops."""
    parser = argparse.ArgumentParser(prog="order-service", description=__doc__)
    parser.add_argument("--db", default=DEFAULT_DB_PATH)
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--http-port", type=int, default=DEFAULT_HTTP_PORT)
    parser.add_argument(
        "--inventory-addr", default=os.environ.get("INVENTORY_SERVICE_GRPC_ADDR", "")
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stdout, level=logging.INFO,
        format=f"%(asctime)s %(levelname)s service={SERVICE} %(message)s",
    )
    logger = logging.getLogger(__name__)

    if not args.inventory_addr:
        logger.error("Failed to connect to inventory service: no address given")
        return 1

    with grpc.insecure_channel(args.inventory_addr) as channel:
        app = build_app(args.db, InventoryRpcClient(channel), logger)
        app.run(host=args.host, port=args.http_port, use_reloader=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())