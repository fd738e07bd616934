"""
Checkout route.

POST /api/checkout with the checkout form as JSON:

    201 -> created order; the session cart is cleared
    400 -> form errors per field, empty cart, or invalid line quantities
    502 -> order gateway failed; the cart is left as it was for retry
"""

from flask import Blueprint, current_app, jsonify, request

from routes.cart import get_cart_store
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

checkout_bp = Blueprint("checkout", __name__, url_prefix="/api")


@checkout_bp.route("/checkout", methods=["POST"])
def checkout():
    """Place an order for everything in the cart."""
    assembler = current_app.config["CHECKOUT"]
    store = get_cart_store()

    logger.info(f"Checkout started: {len(store)} lines, {store.total_items}kg")

    order = assembler.submit(store, request.get_json(silent=True))

    return jsonify(order.to_dict()), 201
