"""
Order data models.

These models represent an order as it flows through the application:
checkout form -> OrderCreate payload -> stored Order.

    CheckoutForm  - customer/shipping fields typed in at checkout
    OrderCreate   - payload submitted to an order gateway
    Order         - created order with server-assigned id and timestamps

Orders are immutable once created; there is no update API.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from core.quantity import MINIMUM_ORDER_QUANTITY, QUANTITY_INCREMENT, is_valid_quantity
from modules.text import sanitize_text
from .base import CamelModel

MAX_TEXT_LENGTH = 200
MAX_NOTES_LENGTH = 1000


class OrderStatus(str, Enum):
    """
    Fulfilment status of an order.

    Lifecycle:
        PENDING -> PROCESSING -> SHIPPED -> DELIVERED
        (any non-delivered state) -> CANCELLED
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Payment state of an order."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    """Payment options offered at checkout."""

    CARD = "card"
    BANK = "bank"
    COD = "cod"


def _clean(value: Optional[str], max_length: int = MAX_TEXT_LENGTH) -> Optional[str]:
    if value is None:
        return None
    return sanitize_text(value, max_length=max_length)


class CheckoutForm(CamelModel):
    """
    Customer and shipping fields captured on the checkout page.

    All text is stripped of HTML before validation of the required fields,
    so a field containing only markup counts as missing.
    """

    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    shipping_street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CARD
    notes: Optional[str] = None
    user_id: str = "guest"

    @field_validator(
        "customer_name", "shipping_street", "city",
        "state", "postal_code", "country",
        mode="before",
    )
    @classmethod
    def _sanitize(cls, value):
        if isinstance(value, str):
            return _clean(value)
        return value

    @field_validator("customer_phone", mode="before")
    @classmethod
    def _sanitize_phone(cls, value):
        if isinstance(value, str):
            return _clean(value) or None
        return value

    @field_validator("user_id", mode="before")
    @classmethod
    def _sanitize_user(cls, value):
        if isinstance(value, str):
            return _clean(value) or "guest"
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _sanitize_notes(cls, value):
        if isinstance(value, str):
            return _clean(value, MAX_NOTES_LENGTH) or None
        return value


class ShippingAddress(CamelModel):
    """Where the order ships to."""

    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class OrderItem(CamelModel):
    """One ordered product with its price snapshot."""

    product_id: str = Field(min_length=1)
    quantity: int
    price: Decimal = Field(ge=0)

    @field_validator("quantity")
    @classmethod
    def _check_quantity(cls, value: int) -> int:
        if not is_valid_quantity(value):
            raise ValueError(
                f"Quantity must be at least {MINIMUM_ORDER_QUANTITY}kg "
                f"in steps of {QUANTITY_INCREMENT}kg"
            )
        return value


class OrderCreate(CamelModel):
    """Order payload as submitted to an order gateway."""

    user_id: str = "guest"
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    items: List[OrderItem] = Field(min_length=1)
    total: Decimal = Field(ge=0)
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = PaymentMethod.CARD
    payment_status: PaymentStatus = PaymentStatus.PENDING
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None


class Order(OrderCreate):
    """A created order."""

    id: str = Field(min_length=1)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def item_count(self) -> int:
        """Total ordered quantity across items."""
        return sum(item.quantity for item in self.items)
