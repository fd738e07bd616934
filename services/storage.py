"""
Server-side in-memory storage for products, orders and inquiries.

Backs the product catalog (CATALOG_SOURCE="local"), the order and inquiry
endpoints, and acts as the local order gateway for checkout
(ORDER_BACKEND="local"). Data lives for the life of
the process; products are seeded from a JSON file at startup.

Thread Safety:
    Flask may serve requests from several threads, so every operation
    takes a threading.Lock. Stored models are immutable from the outside
    (callers get the pydantic instances, which are never mutated here).
"""

from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from core.exceptions import OrderNotFoundError
from models.inquiry import Inquiry, InquiryCreate
from models.order import Order, OrderCreate, OrderStatus, PaymentStatus
from models.product import Product, ProductList
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class MemStorage:
    """In-memory storage with the read/create operations the API needs."""

    def __init__(self, products: Optional[List[Product]] = None):
        self._products: Dict[str, Product] = {}
        self._orders: Dict[str, Order] = {}
        self._inquiries: Dict[str, Inquiry] = {}
        self._lock = threading.Lock()

        for product in products or []:
            self._products[product.id] = product

        logger.info(f"MemStorage initialized with {len(self._products)} products")

    @classmethod
    def from_seed_file(cls, path) -> "MemStorage":
        """
        Create storage seeded with products from a JSON file.

        Raises:
            FileNotFoundError: If the seed file does not exist
            pydantic.ValidationError: If the seed data is malformed
        """
        with open(Path(path), "r", encoding="utf-8") as f:
            raw = json.load(f)
        return cls(ProductList.validate_python(raw))

    # =========================================================================
    # PRODUCTS
    # =========================================================================

    def get_products(self) -> List[Product]:
        with self._lock:
            return list(self._products.values())

    # =========================================================================
    # ORDERS
    # =========================================================================

    def create_order(self, order: OrderCreate) -> Order:
        """
        Store a new order.

        The server assigns the id and timestamps and always starts the
        order as pending/pending, whatever the payload says.
        """
        now = _now_iso()
        data = order.model_dump()
        data.update(
            id=str(uuid.uuid4()),
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        created = Order.model_validate(data)

        with self._lock:
            self._orders[created.id] = created

        logger.info(
            f"Order {created.id[:8]} created: {len(created.items)} items, total {created.total}"
        )
        return created

    def get_order(self, order_id: str) -> Order:
        """
        Raises:
            OrderNotFoundError: If no order has this id
        """
        with self._lock:
            order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    @property
    def order_count(self) -> int:
        with self._lock:
            return len(self._orders)

    # =========================================================================
    # INQUIRIES
    # =========================================================================

    def create_inquiry(self, inquiry: InquiryCreate) -> Inquiry:
        data = inquiry.model_dump()
        data.update(id=str(uuid.uuid4()), created_at=_now_iso())
        created = Inquiry.model_validate(data)

        with self._lock:
            self._inquiries[created.id] = created

        logger.info(f"Inquiry {created.id[:8]} created ({created.type.value})")
        return created

    def get_inquiry(self, inquiry_id: str) -> Optional[Inquiry]:
        with self._lock:
            return self._inquiries.get(inquiry_id)
