"""Inventory and order services for a small online shop, stored in SQLite."""

__version__ = "0.1.0"