"""
Shopping cart store with durable persistence.

The store is an explicitly constructed object over a string key-value
storage (a MutableMapping[str, str]):

    - In the web app: the Flask session, one cart per browser session
    - Elsewhere: FileCartStorage, a JSON file on disk
    - In tests: a plain dict

The whole cart is serialized as a JSON array of lines under one key on
every mutation, and read back whole on construction. Malformed stored
data resets the cart to empty; the problem is logged, never raised.

Quantity invariant:
    Every line's quantity satisfies core.quantity.is_valid_quantity().
    Quantities entering the store are passed through
    round_to_nearest_increment(); a quantity update below the MOQ removes
    the line.

Concurrency:
    One store instance per request/UI loop. Stores sharing a storage are
    last-write-wins; there is no cross-tab/cross-process merging.
"""

from __future__ import annotations

import json
import math
import os
import tempfile
from collections.abc import MutableMapping
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from core.quantity import (
    MINIMUM_ORDER_QUANTITY,
    get_next_valid_quantity,
    is_valid_quantity,
    round_to_nearest_increment,
)
from models.cart import Cart, CartLine
from models.product import Product
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "rsCart"


class FileCartStorage(MutableMapping):
    """
    String key-value storage backed by one JSON object on disk.

    Every write rewrites the file (atomically, via a temp file + rename).
    A missing or unreadable file reads as empty.
    """

    def __init__(self, path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read cart storage {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def __getitem__(self, key: str) -> str:
        return self._read()[key]

    def __setitem__(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def __delitem__(self, key: str) -> None:
        data = self._read()
        del data[key]
        self._write(data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._read())

    def __len__(self) -> int:
        return len(self._read())


class CartStore:
    """
    Mutable cart of product lines, persisted on every change.

    Lines are unique by product id and kept in insertion order. Mutating
    methods return the updated Cart snapshot.

    Attributes:
        storage_key: Key under which the cart JSON is stored
    """

    def __init__(self, storage: MutableMapping, storage_key: str = DEFAULT_STORAGE_KEY):
        """
        Create a store and load any saved cart from storage.

        Args:
            storage: String key-value mapping (session, FileCartStorage, dict)
            storage_key: Key for the serialized cart
        """
        self._storage = storage
        self.storage_key = storage_key
        self._lines: Dict[str, CartLine] = {}
        self.load()

    # =========================================================================
    # READS
    # =========================================================================

    @property
    def lines(self) -> List[CartLine]:
        """Copy of the current lines, in insertion order."""
        return list(self.snapshot().lines)

    @property
    def total_items(self) -> int:
        """Sum of quantities (kg)."""
        return sum(line.quantity for line in self._lines.values())

    @property
    def total_price(self):
        """Sum of price x quantity using each line's price snapshot."""
        return self.snapshot().total_price

    def snapshot(self) -> Cart:
        """Immutable snapshot of the cart."""
        return Cart.from_lines(list(self._lines.values()))

    def get(self, product_id: str) -> Optional[CartLine]:
        line = self._lines.get(product_id)
        if line is None:
            return None
        return Cart.from_lines([line]).lines[0]

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_item(self, product: Product, quantity=MINIMUM_ORDER_QUANTITY) -> Cart:
        """
        Add a product, or add to its existing line.

        A new line gets the requested quantity rounded to a valid quantity.
        For an existing line the requested amount is added to the line and
        the sum is rounded, so 25kg + 10kg gives 35kg. Adding never lowers a
        line: zero, negative or non-numeric amounts add the MOQ instead. The
        line keeps the name, price and image captured when it was created.

        Args:
            product: Catalog product
            quantity: Requested quantity in kg (default: the MOQ)

        Returns:
            Updated cart snapshot
        """
        valid_quantity = round_to_nearest_increment(quantity)
        existing = self._lines.get(product.id)

        if existing:
            # Only a positive amount is added as-is; anything else adds the MOQ
            added = quantity if _is_number(quantity) and quantity > 0 else valid_quantity
            existing.quantity = round_to_nearest_increment(existing.quantity + added)
            logger.debug(f"Cart line {product.id} increased to {existing.quantity}kg")
        else:
            self._lines[product.id] = CartLine(
                id=product.id,
                name=product.name,
                price=product.price,
                image=product.primary_image,
                quantity=valid_quantity,
            )
            logger.debug(f"Cart line {product.id} added at {valid_quantity}kg")

        self.save()
        return self.snapshot()

    def remove_item(self, product_id: str) -> Cart:
        """Remove a line. Removing an absent product is a no-op."""
        if self._lines.pop(product_id, None) is not None:
            logger.debug(f"Cart line {product_id} removed")
            self.save()
        return self.snapshot()

    def update_quantity(self, product_id: str, quantity) -> Cart:
        """
        Set a line's quantity.

        A quantity below the MOQ (including non-numeric input) removes the
        line. Otherwise the quantity is rounded to a valid quantity. Absent
        products are ignored.
        """
        if product_id not in self._lines:
            return self.snapshot()

        if not _at_least_moq(quantity):
            return self.remove_item(product_id)

        self._lines[product_id].quantity = round_to_nearest_increment(quantity)
        self.save()
        return self.snapshot()

    def step_quantity(self, product_id: str, direction: int) -> Cart:
        """
        Move a line one increment up (+1) or down (-1), never below the MOQ.

        Raises:
            ValueError: If direction is not +1 or -1
        """
        line = self._lines.get(product_id)
        if line is None:
            # Validate direction even when there is nothing to change
            get_next_valid_quantity(MINIMUM_ORDER_QUANTITY, direction)
            return self.snapshot()

        return self.update_quantity(product_id, get_next_valid_quantity(line.quantity, direction))

    def clear(self) -> Cart:
        """Empty the cart."""
        self._lines.clear()
        self.save()
        return self.snapshot()

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def to_json(self) -> str:
        """Serialize the cart as a JSON array of lines."""
        return json.dumps([line.to_dict() for line in self._lines.values()])

    def save(self) -> None:
        """Write the whole cart to storage."""
        self._storage[self.storage_key] = self.to_json()

    def load(self) -> None:
        """
        Replace the in-memory cart with the stored one.

        Malformed data (bad JSON, wrong shape, bad line) yields an empty
        cart and an error log entry. Stored quantities that break the
        quantity policy are rounded to the nearest valid quantity.
        """
        self._lines = {}
        raw = self._storage.get(self.storage_key)
        if not raw:
            return

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            lines = [CartLine.from_dict(item) for item in data]
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to parse saved cart, starting empty: {e}")
            return

        for line in lines:
            if not is_valid_quantity(line.quantity):
                fixed = round_to_nearest_increment(line.quantity)
                logger.warning(
                    f"Saved cart line {line.id} had invalid quantity {line.quantity}, using {fixed}"
                )
                line.quantity = fixed
            else:
                line.quantity = int(line.quantity)
            # Duplicate ids: the later line wins
            self._lines[line.id] = line

        logger.debug(f"Loaded cart with {len(self._lines)} lines")


def _is_number(quantity) -> bool:
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        return False
    return math.isfinite(quantity)


def _at_least_moq(quantity) -> bool:
    try:
        return float(quantity) >= MINIMUM_ORDER_QUANTITY
    except (TypeError, ValueError):
        return False
