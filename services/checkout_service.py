"""
Checkout: cart + customer form -> submitted order.

Flow:
    1. Parse the checkout form (InputValidationError lists bad fields)
    2. Validation gate: every cart line must satisfy the quantity policy
       (InvalidCartQuantityError names the offending products)
    3. Assemble an OrderCreate: items from cart lines (price snapshots),
       total from the cart, status/paymentStatus "pending"
    4. Submit once through the order gateway
    5. On success clear the cart; on failure leave it untouched

Order gateways expose ``create_order(OrderCreate) -> Order``:
    - services.storage.MemStorage (this server)
    - core.api_client.StorefrontAPIClient (remote API)

Submissions are never retried automatically; the user resubmits.
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import ValidationError

from core.exceptions import (
    CashewStoreError,
    EmptyCartError,
    InputValidationError,
    InvalidCartQuantityError,
    OrderSubmissionError,
)
from core.quantity import is_valid_quantity
from core.validation import format_validation_errors, parse_or_raise
from models.cart import Cart
from models.order import (
    CheckoutForm,
    Order,
    OrderCreate,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    ShippingAddress,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class CheckoutAssembler:
    """Validates a cart and turns it into a submitted order."""

    def __init__(self, order_gateway):
        """
        Args:
            order_gateway: Object with create_order(OrderCreate) -> Order
        """
        self._gateway = order_gateway

    def validate_cart(self, cart: Cart) -> None:
        """
        Block checkout for an empty cart or any invalid line quantity.

        Raises:
            EmptyCartError: If the cart has no lines
            InvalidCartQuantityError: If any line fails is_valid_quantity()
        """
        if cart.is_empty:
            raise EmptyCartError()

        invalid_items = [
            {"productId": line.id, "name": line.name, "quantity": line.quantity}
            for line in cart.lines
            if not is_valid_quantity(line.quantity)
        ]
        if invalid_items:
            logger.warning(f"Checkout blocked, invalid quantities: {invalid_items}")
            raise InvalidCartQuantityError(invalid_items)

    def assemble(
        self,
        cart: Cart,
        form: Union[CheckoutForm, Dict[str, Any]],
    ) -> OrderCreate:
        """
        Build the order payload.

        Args:
            cart: Cart snapshot
            form: CheckoutForm or raw form dictionary

        Returns:
            OrderCreate ready for submission

        Raises:
            InputValidationError: If the form is invalid
            EmptyCartError / InvalidCartQuantityError: See validate_cart()
        """
        checkout_form = parse_or_raise(CheckoutForm, form, "Invalid checkout data")
        self.validate_cart(cart)

        try:
            items: List[OrderItem] = [
                OrderItem(product_id=line.id, quantity=line.quantity, price=line.price)
                for line in cart.lines
            ]
            return OrderCreate(
                user_id=checkout_form.user_id,
                customer_name=checkout_form.customer_name,
                customer_email=checkout_form.customer_email,
                customer_phone=checkout_form.customer_phone,
                items=items,
                total=cart.total_price,
                shipping_address=ShippingAddress(
                    street=checkout_form.shipping_street,
                    city=checkout_form.city,
                    state=checkout_form.state,
                    postal_code=checkout_form.postal_code,
                    country=checkout_form.country,
                ),
                payment_method=checkout_form.payment_method,
                payment_status=PaymentStatus.PENDING,
                status=OrderStatus.PENDING,
                notes=checkout_form.notes,
            )
        except ValidationError as e:
            raise InputValidationError("Invalid order data", format_validation_errors(e)) from e

    def submit(self, store, form: Union[CheckoutForm, Dict[str, Any]]) -> Order:
        """
        Validate, assemble and submit the store's cart; clear it on success.

        Args:
            store: CartStore holding the cart
            form: CheckoutForm or raw form dictionary

        Returns:
            Created Order

        Raises:
            InputValidationError, EmptyCartError, InvalidCartQuantityError:
                Submission was refused; nothing was sent
            OrderSubmissionError: The gateway failed; the cart is unchanged
        """
        order_payload = self.assemble(store.snapshot(), form)

        try:
            order = self._gateway.create_order(order_payload)
        except CashewStoreError as e:
            logger.error(f"Order submission failed: {e}")
            raise OrderSubmissionError(
                "There was an error processing your order. Please try again.", cause=e
            ) from e

        store.clear()
        logger.info(f"Order {order.id} placed; cart cleared")
        return order
