"""
Cashew storefront - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + config classes)
2. Seeds server storage with the product catalog (fail-fast)
3. Builds the catalog accessor and order gateway for the configured backends
4. Registers route blueprints
5. Sets up request ids, request logging and JSON error handlers

ARCHITECTURE:
    Flask app
    ├── MemStorage          seeded products, plus orders / inquiries (local backend)
    ├── ProductCatalog      cached catalog reads (MemStorage, static JSON or remote API)
    ├── CheckoutAssembler   cart -> order, through the order gateway
    └── CartStore           built per request over the session cart

Services are stored in app.config and read by routes via current_app.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException

from logging_config import get_logger, init_request_logging, setup_logging
from core.api_client import StorefrontAPIClient
from core.exceptions import (
    CatalogFetchError,
    CheckoutError,
    InputValidationError,
    InvalidCartQuantityError,
    OrderNotFoundError,
    OrderSubmissionError,
    ProductNotFoundError,
)
from services.catalog_service import (
    ApiCatalogSource,
    ProductCatalog,
    StaticCatalogSource,
    StorageCatalogSource,
)
from services.checkout_service import CheckoutAssembler
from services.storage import MemStorage
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _build_catalog(
    config: Dict[str, Any],
    storage: MemStorage,
    api_client: Optional[StorefrontAPIClient],
) -> ProductCatalog:
    """Create the catalog accessor for CATALOG_SOURCE."""
    source_name = config.get("CATALOG_SOURCE", "local")
    if source_name == "local":
        source = StorageCatalogSource(storage)
    elif source_name == "api":
        source = ApiCatalogSource(api_client)
    elif source_name == "static":
        source = StaticCatalogSource(config["CATALOG_STATIC_PATH"])
    else:
        raise ValueError(f"Unknown CATALOG_SOURCE: {source_name!r} (expected 'local', 'static' or 'api')")

    return ProductCatalog(
        source,
        stale_seconds=config.get("CATALOG_STALE_SECONDS", 300.0),
        max_retries=config.get("CATALOG_MAX_RETRIES", 3),
        retry_delay_seconds=config.get("CATALOG_RETRY_DELAY_SECONDS", 1.0),
    )


def create_app(
    config_object: str = "config.Config",
    overrides: Optional[Dict[str, Any]] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: If the seed product file cannot be loaded, the app will
    not start.

    Args:
        config_object: Import path of the config class
        overrides: Extra config values applied last (tests, scripts)

    Returns:
        Configured Flask application

    Raises:
        FileNotFoundError: If SEED_PRODUCTS_PATH does not exist
        ValueError: If CATALOG_SOURCE / ORDER_BACKEND is unknown
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting cashew storefront in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # SERVICES
    # =========================================================================

    try:
        storage = MemStorage.from_seed_file(app.config["SEED_PRODUCTS_PATH"])
    except FileNotFoundError:
        logger.critical(f"Seed product file not found: {app.config['SEED_PRODUCTS_PATH']}")
        raise

    api_client = None
    if "api" in (app.config.get("CATALOG_SOURCE"), app.config.get("ORDER_BACKEND")):
        api_client = StorefrontAPIClient(
            app.config["STOREFRONT_API_URL"],
            timeout=app.config.get("API_TIMEOUT_SECONDS", 10.0),
        )
        logger.info(f"Remote storefront API: {api_client.base_url}")

    order_backend = app.config.get("ORDER_BACKEND", "local")
    if order_backend == "api":
        order_gateway = api_client
    elif order_backend == "local":
        order_gateway = storage
    else:
        raise ValueError(f"Unknown ORDER_BACKEND: {order_backend!r} (expected 'local' or 'api')")

    app.config["STORAGE"] = storage
    app.config["API_CLIENT"] = api_client
    app.config["CATALOG"] = _build_catalog(app.config, storage, api_client)
    app.config["CHECKOUT"] = CheckoutAssembler(order_gateway)
    app.config["INQUIRY_GATEWAY"] = order_gateway

    register_blueprints(app)

    init_request_logging(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(InputValidationError)
    def handle_validation_error(e: InputValidationError):
        logger.info(f"Validation failed: {e.message} {e.fields}")
        return jsonify({"error": e.message, "details": e.errors}), 400

    @app.errorhandler(ProductNotFoundError)
    def handle_product_not_found(e: ProductNotFoundError):
        return jsonify({"error": "Product not found", "productId": e.product_id}), 404

    @app.errorhandler(OrderNotFoundError)
    def handle_order_not_found(e: OrderNotFoundError):
        return jsonify({"error": "Order not found", "orderId": e.order_id}), 404

    @app.errorhandler(CatalogFetchError)
    def handle_catalog_error(e: CatalogFetchError):
        logger.error(f"Catalog unavailable: {e}")
        return jsonify({
            "error": "Failed to fetch products",
            "requestId": g.get("request_id"),
            "retryable": True,
        }), 503

    @app.errorhandler(InvalidCartQuantityError)
    def handle_invalid_quantities(e: InvalidCartQuantityError):
        return jsonify({"error": e.message, "invalidItems": e.invalid_items}), 400

    @app.errorhandler(OrderSubmissionError)
    def handle_submission_error(e: OrderSubmissionError):
        return jsonify({"error": e.message, "retryable": True}), 502

    @app.errorhandler(CheckoutError)
    def handle_checkout_error(e: CheckoutError):
        return jsonify({"error": e.message}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_server_error(e: Exception):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({
            "error": "Internal Server Error",
            "requestId": g.get("request_id"),
        }), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    port = int(os.environ.get("PORT", "5001"))
    app.run(debug=debug_mode, port=port)
