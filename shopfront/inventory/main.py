"""Entry point of the inventory service: HTTP API plus the gRPC product info server."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from concurrent import futures
from contextlib import closing
from os import PathLike

import grpc
from flask import Flask

from shopfront.database import init_db
from shopfront.inventory.handler import create_app
from shopfront.inventory.repository import SqlInventoryRepository
from shopfront.inventory.rpc import InventoryRpcServer, add_inventory_servicer
from shopfront.inventory.service import InventoryService


def _service(connection, logger: logging.Logger) -> InventoryService:
    return InventoryService(SqlInventoryRepository(connection, logger), logger)


def build_app(db_path: str | PathLike[str], logger: logging.Logger | None = None) -> Flask:
    """Return the inventory HTTP application backed by the database at ``db_path``."""
    logger = logger or logging.getLogger(__name__)
    return create_app(_service(init_db(db_path), logger), logger)


def main(argv: list[str] | None = None) -> int:
    """Run the inventory service until the gRPC server stops."""
    parser = argparse.ArgumentParser(prog="inventory-service", description=__doc__)
    parser.add_argument("--db", default="ecommerce.db")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--http-port", type=int, default=8082)
    parser.add_argument("--grpc-port", default=os.environ.get("GRPC_PORT", ""))
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stdout, level=logging.INFO,
        format="%(asctime)s %(levelname)s service=product-service %(message)s",
    )
    logger = logging.getLogger(__name__)

    with closing(init_db(args.db)) as connection:
        service = _service(connection, logger)
        app = create_app(service, logger)
        threading.Thread(
            target=app.run,
            kwargs={"host": args.host, "port": args.http_port, "use_reloader": False},
            daemon=True,
        ).start()

        server = grpc.server(futures.ThreadPoolExecutor(max_workers=10))
        add_inventory_servicer(server, InventoryRpcServer(service))
        try:
            bound = server.add_insecure_port(f"[::]:{args.grpc_port or 0}")
        except RuntimeError:
            bound = 0
        if bound == 0:
            logger.error("Failed to listen for gRPC on port %r", args.grpc_port)
            return 1

        logger.info("gRPC inventory server is starting on port %d", bound)
        server.start()
        try:
            server.wait_for_termination()
        except KeyboardInterrupt:
            server.stop(grace=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())