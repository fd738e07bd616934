"""
Flask route blueprints for the cashew storefront.

This module contains all route handlers organized by functionality:
- main: API index and health check
- products: catalog reads
- cart: session cart (AJAX)
- checkout: cart -> order
- orders: order create/read
- inquiries: contact and export leads

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .products import products_bp
from .cart import cart_bp
from .checkout import checkout_bp
from .orders import orders_bp
from .inquiries import inquiries_bp

__all__ = [
    "main_bp",
    "products_bp",
    "cart_bp",
    "checkout_bp",
    "orders_bp",
    "inquiries_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(inquiries_bp)
