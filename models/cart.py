"""
Cart data models.

CartLine is one product's quantity entry. It references the product by id
and keeps a denormalized snapshot of name/price/image taken when the
product was first added; totals are computed from that snapshot, never
from a live catalog lookup.

Cart is an immutable snapshot of a CartStore, returned from every store
mutation and consumed by the checkout assembler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, List, Optional, Tuple


@dataclass
class CartLine:
    """One product line in the cart."""

    id: str
    """Product id (reference into the catalog)."""

    name: str
    """Product name at add time."""

    price: Decimal
    """Unit price (per kg) at add time."""

    image: str
    """Product image at add time."""

    quantity: int
    """Quantity in kg."""

    @property
    def product_id(self) -> str:
        """Alias for id, matching order item naming."""
        return self.id

    @property
    def line_total(self) -> Decimal:
        """price x quantity."""
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage (price kept as a string)."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "image": self.image,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartLine":
        """
        Create from a stored dictionary.

        Raises:
            ValueError: If the record is missing an id or has a bad
                price/quantity
        """
        if not isinstance(data, dict):
            raise ValueError(f"Cart line must be an object, got {type(data).__name__}")

        product_id = data.get("id")
        if not product_id or not isinstance(product_id, str):
            raise ValueError("Cart line is missing a product id")

        try:
            price = Decimal(str(data.get("price", "0")))
        except InvalidOperation as e:
            raise ValueError(f"Invalid price for {product_id}: {data.get('price')!r}") from e
        if not price.is_finite() or price < 0:
            raise ValueError(f"Invalid price for {product_id}: {price}")

        quantity = data.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
            raise ValueError(f"Invalid quantity for {product_id}: {quantity!r}")

        return cls(
            id=product_id,
            name=str(data.get("name", "")),
            price=price,
            image=str(data.get("image", "")),
            quantity=quantity,
        )


@dataclass(frozen=True)
class Cart:
    """
    Immutable snapshot of a cart.

    Lines are kept in insertion order and are unique by product id.
    """

    lines: Tuple[CartLine, ...] = field(default_factory=tuple)

    @classmethod
    def from_lines(cls, lines: List[CartLine]) -> "Cart":
        """Snapshot a list of lines (copies each line)."""
        return cls(lines=tuple(
            CartLine(
                id=line.id,
                name=line.name,
                price=line.price,
                image=line.image,
                quantity=line.quantity,
            )
            for line in lines
        ))

    @property
    def total_items(self) -> int:
        """Sum of line quantities."""
        return sum(line.quantity for line in self.lines)

    @property
    def total_price(self) -> Decimal:
        """Sum of price x quantity over all lines."""
        return sum((line.line_total for line in self.lines), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get(self, product_id: str) -> Optional[CartLine]:
        """Line for product_id, or None."""
        for line in self.lines:
            if line.id == product_id:
                return line
        return None

    def __contains__(self, product_id: object) -> bool:
        return any(line.id == product_id for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary for API responses."""
        return {
            "items": [line.to_dict() for line in self.lines],
            "totalItems": self.total_items,
            "totalPrice": str(self.total_price),
        }
