"""Unit tests for the response envelope and paged result."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from rest_framework import status

from modules.core.responses import (
    ApiResponse,
    ErrorKind,
    PagedResult,
    envelope_response,
)
from modules.products.dtos import ProductOutputDTO

pytestmark = pytest.mark.unit


def _output() -> ProductOutputDTO:
    return ProductOutputDTO(
        id=1,
        name="Lamp",
        price=Decimal("9.90"),
        stock_quantity=2,
        is_active=True,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestApiResponse:
    def test_success_shape(self):
        wire = ApiResponse.success_response([1, 2], "ok").to_wire()
        assert wire == {"success": True, "message": "ok", "data": [1, 2], "errors": None}

    def test_error_shape_hides_kind(self):
        envelope = ApiResponse.error_response("bad", ["x"], kind=ErrorKind.NOT_FOUND)
        assert envelope.to_wire() == {
            "success": False,
            "message": "bad",
            "data": None,
            "errors": ["x"],
        }

    def test_error_defaults_to_empty_list_and_internal(self):
        envelope = ApiResponse.error_response("oops")
        assert envelope.errors == []
        assert envelope.kind is ErrorKind.INTERNAL

    @pytest.mark.parametrize(
        "kind, code",
        [
            (ErrorKind.INVALID_INPUT, 400),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.INTERNAL, 500),
        ],
    )
    def test_status_by_kind(self, kind, code):
        assert ApiResponse.error_response("m", kind=kind).status_code == code

    def test_nested_models_dump_camel_case(self):
        wire = ApiResponse.success_response(_output()).to_wire()
        assert wire["data"]["stockQuantity"] == 2
        assert wire["data"]["price"] == Decimal("9.90")


class TestPagedResult:
    @pytest.mark.parametrize(
        "total, size, pages",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (101, 100, 2)],
    )
    def test_total_pages(self, total, size, pages):
        page = PagedResult(items=[], total_count=total, page_number=1, page_size=size)
        assert page.total_pages == pages

    def test_navigation_flags(self):
        page = PagedResult(items=[], total_count=30, page_number=2, page_size=10)
        assert page.has_previous is True
        assert page.has_next is True
        last = PagedResult(items=[], total_count=30, page_number=3, page_size=10)
        assert last.has_next is False

    def test_wire_keys(self):
        page = PagedResult(items=[_output()], total_count=1, page_number=1, page_size=10)
        dumped = page.model_dump(by_alias=True)
        assert set(dumped) == {
            "items",
            "totalCount",
            "pageNumber",
            "pageSize",
            "totalPages",
            "hasPrevious",
            "hasNext",
        }
        assert dumped["items"][0]["isActive"] is True


class TestEnvelopeResponse:
    def test_success_status_override(self):
        response = envelope_response(
            ApiResponse.success_response(None, "created"),
            success_status=status.HTTP_201_CREATED,
            headers={"Location": "/api/products/1"},
        )
        assert response.status_code == 201
        assert response["Location"] == "/api/products/1"

    def test_failure_uses_kind(self):
        response = envelope_response(
            ApiResponse.error_response("missing", kind=ErrorKind.NOT_FOUND),
            success_status=status.HTTP_201_CREATED,
        )
        assert response.status_code == 404
        assert response.data["success"] is False
