from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_product():
    """Factory that inserts a product straight through the ORM."""

    def _make(name="Widget", price="10.00", **fields):
        fields.setdefault("created_at", timezone.now())
        return Product.objects.create(name=name, price=Decimal(price), **fields)

    return _make


@pytest.fixture()
def product_payload():
    return {
        "name": "Desk Lamp",
        "description": "LED lamp with adjustable arm",
        "price": "49.90",
        "stockQuantity": 12,
        "category": "Lighting",
        "brand": "Lumen",
        "imageUrl": "https://example.com/images/lamp.jpg",
        "isActive": True,
    }
