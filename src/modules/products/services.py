"""Product service layer (Use Cases).

Orchestrates the Product use-cases on top of the injected
``IProductRepository`` and shapes every outcome into an ``ApiResponse``.

Rules enforced here:
- IDs must be positive (caller input error, distinct from "not found").
- Search, category and brand look-ups reject blank input.
- Paging is clamped, never rejected.
- Updates keep the stored ``id`` and ``created_at``.
- Deletion is soft (``is_active`` -> ``False``).

Public operations never raise.  Domain exceptions are converted to a
failed envelope with the matching ``ErrorKind``; any other exception is
logged and reported with a generic message so internals do not leak.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable, List, Optional, TypeVar

import structlog

from modules.core.responses import ApiResponse, ErrorKind, PagedResult
from modules.products import mapping
from modules.products.exceptions import (
    InvalidProductInput,
    ProductNotFound,
    ProductWriteFailed,
)
from modules.products.query import build_query_plan, clamp_paging

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductOutputDTO,
        ProductQueryParameters,
        UpdateProductDTO,
    )
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., ApiResponse])


def envelope(failure_message: str) -> Callable[[F], F]:
    """Convert whatever the wrapped use-case raises into a failed envelope."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: ProductService, *args: Any, **kwargs: Any) -> ApiResponse:
            try:
                return func(self, *args, **kwargs)
            except InvalidProductInput as exc:
                return ApiResponse.error_response(
                    exc.message, exc.errors, kind=ErrorKind.INVALID_INPUT
                )
            except ProductNotFound as exc:
                return ApiResponse.error_response(str(exc), kind=ErrorKind.NOT_FOUND)
            except ProductWriteFailed as exc:
                return ApiResponse.error_response(str(exc), kind=ErrorKind.INTERNAL)
            except Exception:
                self._log.exception(
                    "product.operation_failed", operation=func.__name__
                )
                return ApiResponse.error_response(
                    failure_message, kind=ErrorKind.INTERNAL
                )

        return wrapper  # type: ignore[return-value]

    return decorator


def _require_positive_id(id: int, log: Any) -> None:
    if id <= 0:
        log.warning("product.invalid_id")
        raise InvalidProductInput(
            "Invalid product ID", ["Product ID must be greater than 0"]
        )


def _outputs(products: List[Product]) -> List[ProductOutputDTO]:
    return [mapping.to_output(product) for product in products]


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` (and optionally a structlog logger)
    via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        log: Optional[Any] = None,
    ) -> None:
        self._repo = repository
        self._log = log or logger

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @envelope("An error occurred while retrieving products")
    def get_all_products(self) -> ApiResponse:
        products = _outputs(self._repo.get_all())
        self._log.info("product.listed", count=len(products))
        return ApiResponse.success_response(
            products, f"Successfully retrieved {len(products)} products"
        )

    @envelope("An error occurred while retrieving paged products")
    def get_paged_products(self, params: ProductQueryParameters) -> ApiResponse:
        page_number, page_size = clamp_paging(params.page_number, params.page_size)
        params = params.model_copy(
            update={"page_number": page_number, "page_size": page_size}
        )
        plan = build_query_plan(params)
        self._log.info(
            "product.paged_requested",
            page_number=plan.page_number,
            page_size=plan.page_size,
            sort=plan.sort.field,
            descending=plan.sort.descending,
            filters=len(plan.filters),
        )

        items, total_count = self._repo.get_paged(plan)
        page = PagedResult(
            items=_outputs(items),
            total_count=total_count,
            page_number=plan.page_number,
            page_size=plan.page_size,
        )
        self._log.info(
            "product.paged_listed", count=len(page.items), total_count=total_count
        )
        return ApiResponse.success_response(
            page, f"Successfully retrieved page {plan.page_number}"
        )

    @envelope("An error occurred while retrieving the product")
    def get_product(self, id: int) -> ApiResponse:
        log = self._log.bind(product_id=id)
        _require_positive_id(id, log)

        product = self._repo.get_by_id(id)
        if product is None:
            log.warning("product.not_found")
            raise ProductNotFound(id)

        log.info("product.retrieved")
        return ApiResponse.success_response(
            mapping.to_output(product), "Product retrieved successfully"
        )

    @envelope("An error occurred while searching products")
    def search_products(self, search_term: str) -> ApiResponse:
        if not search_term or not search_term.strip():
            self._log.warning("product.search_term_empty")
            raise InvalidProductInput(
                "Search term cannot be empty", ["Please provide a valid search term"]
            )

        products = _outputs(self._repo.search(search_term))
        self._log.info("product.searched", term=search_term, count=len(products))
        return ApiResponse.success_response(
            products, f"Found {len(products)} products matching '{search_term}'"
        )

    @envelope("An error occurred while retrieving products by category")
    def get_products_by_category(self, category: str) -> ApiResponse:
        if not category or not category.strip():
            self._log.warning("product.category_empty")
            raise InvalidProductInput("Category cannot be empty")

        products = _outputs(self._repo.get_by_category(category))
        self._log.info("product.by_category", category=category, count=len(products))
        return ApiResponse.success_response(
            products, f"Found {len(products)} products in category '{category}'"
        )

    @envelope("An error occurred while retrieving products by brand")
    def get_products_by_brand(self, brand: str) -> ApiResponse:
        if not brand or not brand.strip():
            self._log.warning("product.brand_empty")
            raise InvalidProductInput("Brand cannot be empty")

        products = _outputs(self._repo.get_by_brand(brand))
        self._log.info("product.by_brand", brand=brand, count=len(products))
        return ApiResponse.success_response(
            products, f"Found {len(products)} products from brand '{brand}'"
        )

    @envelope("An error occurred while retrieving product count")
    def get_product_count(self) -> ApiResponse:
        count = self._repo.get_count()
        self._log.info("product.counted", count=count)
        return ApiResponse.success_response(count, f"Total products: {count}")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @envelope("An error occurred while creating the product")
    def create_product(self, dto: CreateProductDTO) -> ApiResponse:
        log = self._log.bind(name=dto.name)
        product = self._repo.create(mapping.from_create_dto(dto))
        log.info("product.created", product_id=product.id)
        return ApiResponse.success_response(
            mapping.to_output(product), "Product created successfully"
        )

    @envelope("An error occurred while updating the product")
    def update_product(self, id: int, dto: UpdateProductDTO) -> ApiResponse:
        """Replace the mutable fields of an existing product.

        ``id`` and ``created_at`` come from the stored record, whatever
        the payload says.
        """
        log = self._log.bind(product_id=id)
        _require_positive_id(id, log)

        existing = self._repo.get_by_id(id)
        if existing is None:
            log.warning("product.not_found")
            raise ProductNotFound(id)

        product = mapping.from_update_dto(dto)
        product.id = existing.id
        product.created_at = existing.created_at

        updated = self._repo.update(product)
        if updated is None:
            log.error("product.update_failed")
            raise ProductWriteFailed("Failed to update product")

        log.info("product.updated", lifecycle=updated.lifecycle.value)
        return ApiResponse.success_response(
            mapping.to_output(updated), "Product updated successfully"
        )

    @envelope("An error occurred while deleting the product")
    def delete_product(self, id: int) -> ApiResponse:
        """Soft-delete a product: it leaves default listings but stays readable."""
        log = self._log.bind(product_id=id)
        _require_positive_id(id, log)

        if not self._repo.exists(id):
            log.warning("product.not_found")
            raise ProductNotFound(id)

        if not self._repo.delete(id):
            log.error("product.delete_failed")
            raise ProductWriteFailed("Failed to delete product")

        log.info("product.soft_deleted")
        return ApiResponse.success_response(True, "Product deleted successfully")
