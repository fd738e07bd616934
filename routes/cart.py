"""
Cart routes (AJAX endpoints).

Handles:
- GET    /api/cart                       - current cart with totals
- POST   /api/cart/items                 - add {productId, quantity?}
- PATCH  /api/cart/items/<id>            - set {quantity}; below MOQ removes
- POST   /api/cart/items/<id>/step       - {direction: 1|-1}, one increment
- DELETE /api/cart/items/<id>            - remove a line
- DELETE /api/cart                       - empty the cart

The cart lives in the browser session (one cart per session). A fresh
CartStore is built over the session on every request; it saves itself
back on every mutation.
"""

from flask import Blueprint, current_app, jsonify, request, session

from core.exceptions import InputValidationError
from core.quantity import MINIMUM_ORDER_QUANTITY
from services.cart_store import CartStore
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

cart_bp = Blueprint("cart", __name__, url_prefix="/api/cart")


def get_cart_store() -> CartStore:
    """Cart store for the current session."""
    return CartStore(session, current_app.config.get("CART_STORAGE_KEY", "rsCart"))


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _require_number(data: dict, field: str, default=None):
    value = data.get(field, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputValidationError(
            "Invalid cart data", [{"field": field, "message": "Must be a number"}]
        )
    return value


@cart_bp.route("", methods=["GET"])
def get_cart():
    """Return the current cart."""
    return jsonify(get_cart_store().snapshot().to_dict())


@cart_bp.route("", methods=["DELETE"])
def clear_cart():
    """Empty the cart."""
    cart = get_cart_store().clear()
    logger.info("Cart cleared")
    return jsonify(cart.to_dict())


@cart_bp.route("/items", methods=["POST"])
def add_item():
    """
    Add a product to the cart.

    The product is looked up in the catalog so the line gets a current
    name/price/image snapshot. Unknown products give 404.
    """
    data = _json_body()
    product_id = data.get("productId")
    if not product_id or not isinstance(product_id, str):
        raise InputValidationError(
            "Invalid cart data", [{"field": "productId", "message": "Product id is required"}]
        )
    quantity = _require_number(data, "quantity", MINIMUM_ORDER_QUANTITY)
    if quantity <= 0:
        raise InputValidationError(
            "Invalid cart data", [{"field": "quantity", "message": "Quantity must be positive"}]
        )

    product = current_app.config["CATALOG"].get_by_id(product_id)
    cart = get_cart_store().add_item(product, quantity)

    line = cart.get(product_id)
    logger.info(f"Added {product_id} to cart (line now {line.quantity}kg)")
    return jsonify(cart.to_dict()), 201


@cart_bp.route("/items/<product_id>", methods=["PATCH"])
def update_item(product_id: str):
    """Set a line's quantity. Quantities below the MOQ remove the line."""
    quantity = _require_number(_json_body(), "quantity")
    cart = get_cart_store().update_quantity(product_id, quantity)
    return jsonify(cart.to_dict())


@cart_bp.route("/items/<product_id>/step", methods=["POST"])
def step_item(product_id: str):
    """Increase (direction 1) or decrease (direction -1) by one increment."""
    direction = _json_body().get("direction")
    if direction not in (1, -1) or isinstance(direction, bool):
        raise InputValidationError(
            "Invalid cart data", [{"field": "direction", "message": "Direction must be 1 or -1"}]
        )
    cart = get_cart_store().step_quantity(product_id, direction)
    return jsonify(cart.to_dict())


@cart_bp.route("/items/<product_id>", methods=["DELETE"])
def remove_item(product_id: str):
    """Remove a line (no error if it is not in the cart)."""
    cart = get_cart_store().remove_item(product_id)
    return jsonify(cart.to_dict())
