# shopfront

Two small services for an online shop, both storing their data in an SQLite
database file:

- **Inventory service**: stores products (name, price, stock quantity),
  serves an HTTP API for adding products and looking up prices, and runs a
  gRPC server that answers product information requests.
- **Order service**: accepts orders over HTTP, asks the inventory service
  over gRPC for current prices, works out the total and stores the order with
  status `PENDING`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the services

Start the inventory service:

```
shopfront-inventory --db ecommerce.db --http-port 8082 --grpc-port 9090
```

Options:

- `--db`: path of the SQLite database file (default `ecommerce.db`); the
  tables are created if they do not exist.
- `--host`: address the HTTP server listens on (default `0.0.0.0`).
- `--http-port`: HTTP port (default `8082`).
- `--grpc-port`: gRPC port; defaults to the `GRPC_PORT` environment
  variable. If neither is set, a free port is chosen and logged. If the port
  cannot be bound, the command exits with status 1.

Start the order service, pointing it at the inventory service's gRPC
address:

```
shopfront-order --db ecommerce.db --http-port 8081 --inventory-addr localhost:9090
```

Options:

- `--db`, `--host`: as above.
- `--http-port`: HTTP port (default `8081`).
- `--inventory-addr`: gRPC address of the inventory service; defaults to
  the `INVENTORY_SERVICE_GRPC_ADDR` environment variable. Without an address
  the command logs an error and exits with status 1.

Both commands log to standard output at INFO level.

## HTTP API

Every request gets a request id, taken from the `X-Request-Id` header or
generated, which is passed along in log records.

### Inventory

| Method | Path             | Description                                         |
|--------|------------------|-----------------------------------------------------|
| POST   | `/products/`     | Add a product: `{"name", "price", "stockQuantity"}` |
| GET    | `/products/<id>` | Get `{"productId", "price"}` for a product          |

Adding a product answers `202 Accepted` with the stored product
(`id`, `name`, `price`, `stockQuantity`, `createdAt`, `updatedAt`). A body
that is not valid JSON, has fields of the wrong type, or has a missing or
zero `name`, `price` or `stockQuantity` gives `400 Bad Request`. An unknown
product id gives `404 Not Found`; other storage errors give `500`.

### Orders

| Method | Path           | Description                                                         |
|--------|----------------|---------------------------------------------------------------------|
| POST   | `/orders/`     | Create an order: `{"userId", "items": [{"productId", "quantity"}]}` |
| GET    | `/orders/<id>` | Fetch a stored order                                                |

Creating an order answers `202 Accepted` with the stored order
(`id`, `userId`, `items`, `totalPrice`, `status`, `createdAt`, `updatedAt`),
whose items carry the unit price each product had when the order was placed.
A malformed body gives `400 Bad Request`. If the inventory service cannot be
reached, reports an unknown product, or returns no price for a product, the
order is refused with `500`. An unknown order id gives `404 Not Found`.

## gRPC product info

`shopfront.inventory.rpc` provides the `inventory.InventoryService/GetProductInfo`
call. Messages are JSON-encoded (`{"productIds": [...]}` in,
`{"products": [{"id", "name", "price"}]}` out), not protobuf.

- `InventoryRpcServer(service)` answers requests from an `InventoryService`;
  `add_inventory_servicer(server, servicer)` registers it on a `grpc.Server`.
  An unknown product id ends the call with status `NOT_FOUND`.
- `InventoryRpcClient(channel).get_product_info(product_ids)` returns a
  `GetProductInfoResponse` holding `ProductInfo` entries.

## Using the library

```python
import logging

from shopfront.database import init_db
from shopfront.inventory.repository import SqlInventoryRepository
from shopfront.inventory.service import InventoryService

logger = logging.getLogger("inventory")
connection = init_db("shop.db")

service = InventoryService(SqlInventoryRepository(connection, logger), logger)
product = service.add_product("Teapot", 19.5, 10, request_id="req-1")
print(service.get_price(product.id, request_id="req-1"))
```

The other pieces are:

- `shopfront.database`: `init_db(path)` opens an SQLite database and creates
  the schema; `create_schema(connection)` creates the `products` and `orders`
  tables; `build_dsn(...)` formats a PostgreSQL connection URL.
- `shopfront.inventory.repository.SqlInventoryRepository`: `create`,
  `find_by_id`, `find_many_by_ids`, `update_stock_quantity`.
- `shopfront.order.repository.SqlOrderRepository`: `create`, `find_by_id`,
  `update_status`.
- `shopfront.order.service.OrderService(repository, logger, inventory_client)`:
  `create_order(user_id, items)` and `get_order_by_id(order_id)`; raises
  `NoPriceError` when a product has no price.
- `shopfront.inventory.handler.create_app` and
  `shopfront.order.handler.create_app`: the Flask applications;
  `shopfront.inventory.main.build_app` and `shopfront.order.main.build_app`
  build them over a database file.

Lookups and updates of ids that do not exist raise
`shopfront.database.NotFoundError`.

## What it does not do

- Storage is SQLite only. `build_dsn` formats a PostgreSQL URL, but nothing
  connects to PostgreSQL, and there are no migration tools.
- Placing an order does not reserve or reduce stock; stock changes only
  through `SqlInventoryRepository.update_stock_quantity`.
- There is no payment or notification service, and nothing moves an order
  out of `PENDING` except a direct call to `SqlOrderRepository.update_status`.