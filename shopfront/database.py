"""Database connection helpers and the storage schema."""

from __future__ import annotations

import logging
import sqlite3
from os import PathLike

_SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY, name TEXT NOT NULL, price REAL NOT NULL,
    stock_quantity INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL, updated_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS orders (
    id TEXT PRIMARY KEY, user_id TEXT NOT NULL, items TEXT NOT NULL,
    total_price REAL NOT NULL, status TEXT NOT NULL,
    created_at TEXT NOT NULL, updated_at TEXT NOT NULL
);
"""


class NotFoundError(LookupError):
    """Raised when a lookup or update matches no rows."""


def build_dsn(host: str, port: str, user: str, password: str, db_name: str) -> str:
    """Return a PostgreSQL connection URL for the given settings."""
    return f"postgres://{user}:{password}@{host}:{port}/{db_name}?sslmode=disable"


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the products and orders tables if they do not exist yet."""
    with connection:
        connection.executescript(_SCHEMA)


def init_db(path: str | PathLike[str]) -> sqlite3.Connection:
    """Open the database at ``path`` and make sure its schema exists."""
    logging.getLogger(__name__).info("Opening database %s", path)
    connection = sqlite3.connect(path, check_same_thread=False)
    create_schema(connection)
    return connection