"""
Core module for the cashew storefront.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- quantity: Minimum order quantity / increment policy
- validation: pydantic parse-or-error boundary
- api_client: HTTP client for a remote storefront API (import directly;
  it depends on models)
"""

from .exceptions import (
    CashewStoreError,
    InputValidationError,
    ProductNotFoundError,
    OrderNotFoundError,
    APIRequestError,
    CatalogFetchError,
    CheckoutError,
    EmptyCartError,
    InvalidCartQuantityError,
    OrderSubmissionError,
)
from .quantity import (
    MINIMUM_ORDER_QUANTITY,
    QUANTITY_INCREMENT,
    get_next_valid_quantity,
    is_valid_quantity,
    round_to_nearest_increment,
)
from .validation import parse_or_raise

__all__ = [
    "CashewStoreError",
    "InputValidationError",
    "ProductNotFoundError",
    "OrderNotFoundError",
    "APIRequestError",
    "CatalogFetchError",
    "CheckoutError",
    "EmptyCartError",
    "InvalidCartQuantityError",
    "OrderSubmissionError",
    "MINIMUM_ORDER_QUANTITY",
    "QUANTITY_INCREMENT",
    "get_next_valid_quantity",
    "is_valid_quantity",
    "round_to_nearest_increment",
    "parse_or_raise",
]
