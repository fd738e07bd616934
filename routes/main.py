"""
Main routes (index, health).
"""

from flask import Blueprint, current_app, jsonify

from core.exceptions import CatalogFetchError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Describe the API."""
    return jsonify({
        "name": "Cashew Export Storefront API",
        "endpoints": ["/api/products", "/api/cart", "/api/checkout", "/api/orders", "/api/inquiries"],
    })


@main_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    # Check catalog
    catalog = current_app.config.get("CATALOG")
    if catalog:
        try:
            health_status["checks"]["catalog"] = f"ok ({len(catalog.list())} products)"
        except CatalogFetchError as e:
            logger.warning(f"Health check: catalog unavailable: {e.message}")
            health_status["checks"]["catalog"] = "unavailable"
            health_status["status"] = "degraded"
    else:
        health_status["checks"]["catalog"] = "not_configured"
        health_status["status"] = "degraded"

    # Check storage
    storage = current_app.config.get("STORAGE")
    if storage:
        health_status["checks"]["storage"] = "ok"
    else:
        health_status["checks"]["storage"] = "not_available"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return jsonify(health_status), status_code
