"""
Custom exceptions for the cashew storefront.

Exception Hierarchy:
    CashewStoreError (base)
    ├── InputValidationError     - Bad form/payload fields (400, reported per field)
    ├── ProductNotFoundError     - Product id absent from the catalog (404, not retried)
    ├── OrderNotFoundError       - Order id unknown to storage (404)
    ├── CatalogFetchError        - Catalog fetch/parse failed after retries (503, transient)
    ├── APIRequestError          - Remote storefront API call failed (network or non-2xx)
    └── CheckoutError            - Checkout refused or failed
        ├── EmptyCartError           - Nothing to order
        ├── InvalidCartQuantityError - One or more lines break the quantity policy
        └── OrderSubmissionError     - Order gateway rejected/failed; cart left untouched

Usage:
    Validation and not-found errors are reported to the user as-is.
    Transient errors (CatalogFetchError, OrderSubmissionError) are shown as a
    recoverable notification; the user may retry.
"""

from typing import Optional, Dict, Any, List


class CashewStoreError(Exception):
    """
    Base exception for all storefront errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# VALIDATION / LOOKUP ERRORS - reported to the user, never retried
# =============================================================================

class InputValidationError(CashewStoreError):
    """
    Incoming data failed schema validation.

    Carries a list of ``{"field": ..., "message": ...}`` entries so the
    caller can report each problem next to the offending form field.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        self.errors = list(errors or [])
        super().__init__(message, {"errors": self.errors})

    @property
    def fields(self) -> List[str]:
        """Names of the fields that failed validation."""
        return [error["field"] for error in self.errors]


class ProductNotFoundError(CashewStoreError):
    """The requested product id is not in a successfully fetched catalog."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}", {"product_id": product_id})
        self.product_id = product_id


class OrderNotFoundError(CashewStoreError):
    """The requested order id is unknown."""

    def __init__(self, order_id: str):
        super().__init__(f"Order not found: {order_id}", {"order_id": order_id})
        self.order_id = order_id


# =============================================================================
# TRANSIENT ERRORS - network or upstream failures, recoverable
# =============================================================================

class APIRequestError(CashewStoreError):
    """
    A request to the remote storefront API failed.

    status_code is None for network-level failures (connection refused,
    timeout) and the HTTP status for non-2xx responses.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        data: Any = None,
        url: str = "",
    ):
        details: Dict[str, Any] = {"url": url}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code
        self.data = data
        self.url = url


class CatalogFetchError(CashewStoreError):
    """
    The product catalog could not be fetched or parsed.

    Raised after the bounded retry policy is exhausted (or immediately for
    not-found/unauthorized responses). Callers must treat this distinctly
    from ProductNotFoundError: the catalog state is unknown, not empty.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, attempts: int = 1):
        details: Dict[str, Any] = {"attempts": attempts}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code
        self.attempts = attempts


# =============================================================================
# CHECKOUT ERRORS
# =============================================================================

class CheckoutError(CashewStoreError):
    """Base class for checkout refusals and failures."""


class EmptyCartError(CheckoutError):
    """Checkout was attempted with no cart lines."""

    def __init__(self, message: str = "Your cart is empty"):
        super().__init__(message)


class InvalidCartQuantityError(CheckoutError):
    """
    One or more cart lines violate the minimum order / increment policy.

    Submission is blocked until the listed products are adjusted.
    """

    def __init__(self, invalid_items: List[Dict[str, Any]]):
        product_ids = [item["productId"] for item in invalid_items]
        message = (
            "Invalid order quantities for: " + ", ".join(product_ids)
        )
        super().__init__(message, {"invalid_items": invalid_items})
        self.invalid_items = invalid_items
        self.product_ids = product_ids


class OrderSubmissionError(CheckoutError):
    """
    The order gateway failed to create the order.

    The cart is left untouched so the user can resubmit. Submissions are
    never retried automatically.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        details = {"cause": str(cause)} if cause else None
        super().__init__(message, details)
        self.cause = cause
