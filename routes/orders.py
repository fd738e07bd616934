"""
Order routes.

Handles:
- POST /api/orders       - create an order from an OrderCreate payload
- GET  /api/orders/<id>  - fetch an order

Orders have no update API; they are immutable once created.
"""

from flask import Blueprint, current_app, jsonify, request

from core.validation import parse_or_raise
from models.order import OrderCreate


orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


@orders_bp.route("", methods=["POST"])
def create_order():
    """Validate and store an order; 400 "Invalid order data" on bad payloads."""
    payload = parse_or_raise(OrderCreate, request.get_json(silent=True), "Invalid order data")
    order = current_app.config["STORAGE"].create_order(payload)
    return jsonify(order.to_dict()), 201


@orders_bp.route("/<order_id>", methods=["GET"])
def get_order(order_id: str):
    order = current_app.config["STORAGE"].get_order(order_id)
    return jsonify(order.to_dict())
