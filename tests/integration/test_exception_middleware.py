"""Integration tests for the last-resort 500 envelope."""

import logging
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration

TARGET = "modules.products.views.ProductService.get_all_products"


class TestGlobalExceptionMiddleware:
    def test_unhandled_error_is_generic_500(self, api_client, settings):
        settings.API_VERBOSE_ERRORS = False
        with patch(TARGET, side_effect=RuntimeError("kaboom")):
            response = api_client.get("/api/products")
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "An internal server error occurred.",
            "data": None,
            "errors": ["Please contact support if the problem persists."],
        }
        assert "X-Correlation-ID" in response

    def test_verbose_mode_exposes_exception(self, api_client, settings):
        settings.API_VERBOSE_ERRORS = True
        with patch(TARGET, side_effect=RuntimeError("kaboom")):
            response = api_client.get("/api/products")
        data = response.json()
        assert response.status_code == 500
        assert data["message"] == "kaboom"
        assert data["errors"][0] == "kaboom"
        assert "Traceback" in data["errors"][1]

    def test_unhandled_error_is_logged(self, api_client, caplog):
        with caplog.at_level(logging.ERROR), patch(
            TARGET, side_effect=RuntimeError("kaboom")
        ):
            api_client.get("/api/products")
        assert any("unhandled_exception" in r.getMessage() for r in caplog.records)
