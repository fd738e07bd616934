"""Shared pytest fixtures."""

import json
import pytest
from decimal import Decimal
from pathlib import Path

from app import create_app
from models.product import Product


SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "products.json"


@pytest.fixture
def seed_path():
    """Path to the shipped product catalog."""
    return SEED_PATH


@pytest.fixture
def raw_products():
    """Raw catalog records as loaded from JSON."""
    with open(SEED_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def raw_cashews():
    """The W320 raw cashew product (1200/kg)."""
    return Product(
        id="raw-w320",
        name="Raw Cashews W320",
        price=Decimal("1200.00"),
        category="raw",
        image="/images/products/raw-w320/1.png",
    )


@pytest.fixture
def roasted_cashews():
    """The roasted and salted product (1400/kg)."""
    return Product(
        id="roasted-salted",
        name="Roasted and Salted Cashews",
        price=Decimal("1400.00"),
        category="roasted",
        images=["/images/products/roasted-w240/1.png"],
    )


@pytest.fixture
def checkout_form():
    """A complete, valid checkout form as posted by the browser."""
    return {
        "customerName": "Asha Menon",
        "customerEmail": "asha@example.com",
        "customerPhone": "+91 98470 12345",
        "shippingStreet": "12 Harbour Road",
        "city": "Kollam",
        "state": "Kerala",
        "postalCode": "691001",
        "country": "India",
        "paymentMethod": "bank",
        "notes": "Deliver before noon",
    }


@pytest.fixture
def app():
    """Flask app on the testing config (storage-backed catalog, local orders)."""
    app = create_app("config.TestingConfig")
    yield app


@pytest.fixture
def client(app):
    """Flask test client (keeps the session cookie between requests)."""
    return app.test_client()
