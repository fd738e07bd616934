"""
Product catalog routes.

Handles:
- GET /api/products                      - all products (filter/sort via query)
- GET /api/products/<id>                 - one product
- GET /api/products/category/<category>  - products in a category

Reads go through the ProductCatalog (cached, retried). Fetch failures
become 503, unknown ids 404 (see error handlers in app.py).
"""

from flask import Blueprint, current_app, jsonify, request

from modules.product_filters import filter_products
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")

LIST_CACHE_CONTROL = "public, max-age=60"


def _catalog():
    return current_app.config["CATALOG"]


@products_bp.route("", methods=["GET"])
def list_products():
    """
    List products.

    Query parameters (all optional):
        category: category value or "all"
        priceRange: "0-1000", "1000-1500", "1500-2000", "2000+" or "all"
        sortBy: "popularity", "price-low", "price-high", "newest"
    """
    products = _catalog().list()
    products = filter_products(
        products,
        category=request.args.get("category"),
        price_range=request.args.get("priceRange"),
        sort_by=request.args.get("sortBy"),
    )

    logger.info(f"Products retrieved: {len(products)}")

    response = jsonify([p.to_dict() for p in products])
    response.headers["Cache-Control"] = LIST_CACHE_CONTROL
    return response


@products_bp.route("/<product_id>", methods=["GET"])
def get_product(product_id: str):
    """Get one product; 404 if it is not in the catalog."""
    product = _catalog().get_by_id(product_id)
    return jsonify(product.to_dict())


@products_bp.route("/category/<category>", methods=["GET"])
def list_by_category(category: str):
    """List products in one category (possibly empty)."""
    products = _catalog().list_by_category(category)
    response = jsonify([p.to_dict() for p in products])
    response.headers["Cache-Control"] = LIST_CACHE_CONTROL
    return response
