"""
Services layer for the cashew storefront.

This module contains the business logic services:
- ProductCatalog: cached, retrying read access to the product catalog
- CartStore: per-session cart with quantity policy and persistence
- CheckoutAssembler: cart validation and order assembly/submission
- MemStorage: server-side storage for products, orders and inquiries

Services are constructed in create_app() and handed to routes through
app.config; nothing here is a module-level singleton.
"""

from .catalog_service import (
    ApiCatalogSource,
    ProductCatalog,
    StaticCatalogSource,
    StorageCatalogSource,
)
from .cart_store import CartStore, FileCartStorage
from .checkout_service import CheckoutAssembler
from .storage import MemStorage

__all__ = [
    "ApiCatalogSource",
    "ProductCatalog",
    "StaticCatalogSource",
    "StorageCatalogSource",
    "CartStore",
    "FileCartStorage",
    "CheckoutAssembler",
    "MemStorage",
]
