"""Shop page filtering, sorting and price formatting for product lists."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from models.product import Product

PRODUCT_CATEGORIES = [
    {"value": "all", "label": "All Categories"},
    {"value": "raw", "label": "Raw"},
    {"value": "roasted", "label": "Roasted"},
    {"value": "flavored", "label": "Flavored"},
    {"value": "organic", "label": "Organic"},
    {"value": "premium", "label": "Premium"},
    {"value": "pieces", "label": "Pieces"},
    {"value": "processed", "label": "Processed"},
]

PRICE_RANGES = {
    "0-1000": (None, Decimal("1000"), False),
    "1000-1500": (Decimal("1000"), Decimal("1500"), True),
    "1500-2000": (Decimal("1500"), Decimal("2000"), True),
    "2000+": (Decimal("2000"), None, False),
}
"""range key -> (low, high, inclusive). Open ends are exclusive."""

SORT_OPTIONS = ["popularity", "price-low", "price-high", "newest"]


def _in_range(price: Decimal, price_range: str) -> bool:
    low, high, inclusive = PRICE_RANGES[price_range]
    if inclusive:
        return low <= price <= high
    if low is None:
        return price < high
    return price > low


def filter_products(
    products: List[Product],
    category: Optional[str] = None,
    price_range: Optional[str] = None,
    sort_by: Optional[str] = None,
) -> List[Product]:
    """
    Filter and sort a product list for the shop page.

    Unknown price ranges and sort keys are ignored (no filtering / original
    order). "popularity" keeps catalog order; "newest" reverses it.

    Args:
        products: Catalog products in catalog order
        category: Category value, or "all"/None for every category
        price_range: One of PRICE_RANGES keys, or "all"/None
        sort_by: One of SORT_OPTIONS, or None

    Returns:
        New list; the input is not modified
    """
    filtered = list(products)

    if category and category != "all":
        filtered = [p for p in filtered if p.category == category]

    if price_range and price_range in PRICE_RANGES:
        filtered = [p for p in filtered if _in_range(p.price, price_range)]

    if sort_by == "price-low":
        filtered.sort(key=lambda p: p.price)
    elif sort_by == "price-high":
        filtered.sort(key=lambda p: p.price, reverse=True)
    elif sort_by == "newest":
        filtered.reverse()

    return filtered


def format_price(price) -> str:
    """Format a rupee amount for display, e.g. 1200 -> '₹1,200'."""
    value = Decimal(str(price))
    if value == value.to_integral_value():
        return f"₹{int(value):,}"
    return f"₹{value:,.2f}"
