"""
Data models for the cashew storefront.

This module contains:
- Product: catalog record (pydantic, parsed at the catalog edge)
- CartLine / Cart: cart line dataclass and immutable cart snapshot
- CheckoutForm / OrderCreate / Order: checkout input and order records
- InquiryCreate / Inquiry: contact and export leads

Wire models (pydantic) use camelCase JSON field names and snake_case
attributes; see models.base.CamelModel.
"""

from .product import Product, ProductList
from .cart import Cart, CartLine
from .order import (
    CheckoutForm,
    Order,
    OrderCreate,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
)
from .inquiry import Inquiry, InquiryCreate, InquiryStatus, InquiryType

__all__ = [
    # Catalog
    "Product",
    "ProductList",
    # Cart
    "Cart",
    "CartLine",
    # Orders
    "CheckoutForm",
    "Order",
    "OrderCreate",
    "OrderItem",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ShippingAddress",
    # Inquiries
    "Inquiry",
    "InquiryCreate",
    "InquiryStatus",
    "InquiryType",
]
