"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Request
bodies and query strings are parsed into Pydantic DTOs here; the service
returns an ``ApiResponse`` whose ``ErrorKind`` picks the status code.
The view never inspects message text.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import validation_messages
from modules.core.responses import ApiResponse, ErrorKind, envelope_response
from modules.products.dtos import (
    CreateProductDTO,
    ProductQueryParameters,
    UpdateProductDTO,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService


def _validation_failed(exc: PydanticValidationError) -> Response:
    return envelope_response(
        ApiResponse.error_response(
            "Validation failed",
            validation_messages(exc),
            kind=ErrorKind.INVALID_INPUT,
        )
    )


def _body(request: Request) -> Any:
    """JSON bodies arrive as dicts; form bodies as ``QueryDict``."""
    data = request.data
    return data.dict() if hasattr(data, "dict") else data


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD and listing endpoints.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    lookup_value_regex = r"-?\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/products"""
        return envelope_response(self._service.get_all_products())

    @action(detail=False, methods=["get"], url_path="paged")
    def paged(self, request: Request) -> Response:
        """GET /api/products/paged"""
        try:
            params = ProductQueryParameters.model_validate(request.query_params.dict())
        except PydanticValidationError as exc:
            return _validation_failed(exc)
        return envelope_response(self._service.get_paged_products(params))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        return envelope_response(self._service.get_product(int(pk or 0)))

    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/products/search?searchTerm="""
        term = request.query_params.get("searchTerm", "")
        return envelope_response(self._service.search_products(term))

    @action(
        detail=False,
        methods=["get"],
        url_path=r"category/(?P<category>[^/]+)",
        url_name="by-category",
    )
    def by_category(self, request: Request, category: str = "") -> Response:
        """GET /api/products/category/{category}"""
        return envelope_response(self._service.get_products_by_category(category))

    @action(
        detail=False,
        methods=["get"],
        url_path=r"brand/(?P<brand>[^/]+)",
        url_name="by-brand",
    )
    def by_brand(self, request: Request, brand: str = "") -> Response:
        """GET /api/products/brand/{brand}"""
        return envelope_response(self._service.get_products_by_brand(brand))

    @action(detail=False, methods=["get"], url_path="count")
    def count(self, request: Request) -> Response:
        """GET /api/products/count"""
        return envelope_response(self._service.get_product_count())

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        try:
            dto = CreateProductDTO.model_validate(_body(request))
        except PydanticValidationError as exc:
            return _validation_failed(exc)

        result = self._service.create_product(dto)
        if not result.success:
            return envelope_response(result)

        location = reverse(
            "product-detail", kwargs={"pk": result.data.id}, request=request
        )
        return envelope_response(
            result,
            success_status=status.HTTP_201_CREATED,
            headers={"Location": location},
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/products/{pk}"""
        try:
            dto = UpdateProductDTO.model_validate(_body(request))
        except PydanticValidationError as exc:
            return _validation_failed(exc)

        return envelope_response(self._service.update_product(int(pk or 0), dto))

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        return envelope_response(self._service.delete_product(int(pk or 0)))
