"""
Configuration for the cashew storefront.

Values come from the environment (a .env file is loaded first). The
product catalog and order submission each have interchangeable backends:

    CATALOG_SOURCE = "local"   -> products seeded into this server's storage
    CATALOG_SOURCE = "static"  -> JSON file at CATALOG_STATIC_PATH
    CATALOG_SOURCE = "api"     -> remote storefront API at STOREFRONT_API_URL

    ORDER_BACKEND = "local"    -> in-process storage (this server)
    ORDER_BACKEND = "api"      -> POST to the remote storefront API
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "cashew_store_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Catalog
    # ==========================================================================
    # CATALOG_STALE_SECONDS: how long a fetched product list is served from
    #   memory before the next read fetches again (default 5 minutes).
    # CATALOG_MAX_RETRIES: retries after a failed fetch. 404/401 responses
    #   are never retried.
    # CATALOG_RETRY_DELAY_SECONDS: first retry delay, doubled per attempt
    #   and capped at 30 seconds.
    # ==========================================================================
    CATALOG_SOURCE = os.environ.get("CATALOG_SOURCE", "local")
    CATALOG_STATIC_PATH = os.environ.get(
        "CATALOG_STATIC_PATH", str(BASE_DIR / "data" / "products.json")
    )
    CATALOG_STALE_SECONDS = float(os.environ.get("CATALOG_STALE_SECONDS", "300"))
    CATALOG_MAX_RETRIES = int(os.environ.get("CATALOG_MAX_RETRIES", "3"))
    CATALOG_RETRY_DELAY_SECONDS = float(
        os.environ.get("CATALOG_RETRY_DELAY_SECONDS", "1.0")
    )

    # Remote storefront API (used when CATALOG_SOURCE or ORDER_BACKEND is "api")
    STOREFRONT_API_URL = os.environ.get(
        "STOREFRONT_API_URL", "http://localhost:5001/api"
    )
    API_TIMEOUT_SECONDS = float(os.environ.get("API_TIMEOUT_SECONDS", "10"))

    # Orders and inquiries
    ORDER_BACKEND = os.environ.get("ORDER_BACKEND", "local")
    SEED_PRODUCTS_PATH = os.environ.get(
        "SEED_PRODUCTS_PATH", str(BASE_DIR / "data" / "products.json")
    )

    # Cart persistence key (inside the session)
    CART_STORAGE_KEY = "rsCart"


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 30 * 24 * 3600  # carts survive 30 days


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "test-secret-key"
    CATALOG_SOURCE = "local"
    ORDER_BACKEND = "local"
    CATALOG_RETRY_DELAY_SECONDS = 0.0
