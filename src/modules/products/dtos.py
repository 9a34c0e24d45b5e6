"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``) and speak camelCase
on the wire while keeping snake_case attributes.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for full product replacement.
- ``ProductOutputDTO``: output with all product fields.
- ``ProductQueryParameters``: filters, sort and paging for listings.

Validators only *check* string fields; trimming and blank-to-null
normalisation are mapping rules (see ``modules.products.mapping``).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from modules.products.models import Product

_URL_ADAPTER = TypeAdapter(HttpUrl)

# ``isActive`` values that disable the active-flag filter.
_ANY_LIFECYCLE = frozenset({"", "all", "any"})

# Largest value a 32-bit integer column (and the original int binding) holds.
INT32_MAX = 2_147_483_647


def _check_length(value: Optional[str], limit: int, message: str) -> Optional[str]:
    if value is not None and len(value.strip()) > limit:
        raise ValueError(message)
    return value


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class _ProductWriteDTO(BaseModel):
    """Fields shared by creation and full-update requests.

    Validates:
    - ``name`` is non-blank and at most 200 characters.
    - ``price`` is a Decimal greater than zero.
    - ``stock_quantity`` is between 0 and ``INT32_MAX``.
    - optional text fields respect their column lengths.
    - ``image_url`` is a well-formed http(s) URL when present.

    Unknown keys (``id``, ``createdAt`` ...) are ignored.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: str = Field(default="", validate_default=True)
    description: Optional[str] = None
    price: Decimal = Field(max_digits=18, decimal_places=2)
    stock_quantity: int = 0
    category: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Product name is required")
        return _check_length(v, 200, "Product name cannot exceed 200 characters")

    @field_validator("description")
    @classmethod
    def description_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_length(v, 1000, "Description cannot exceed 1000 characters")

    @field_validator("category")
    @classmethod
    def category_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_length(v, 100, "Category cannot exceed 100 characters")

    @field_validator("brand")
    @classmethod
    def brand_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_length(v, 50, "Brand cannot exceed 50 characters")

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than 0")
        return v

    @field_validator("stock_quantity")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock quantity cannot be negative")
        if v > INT32_MAX:
            raise ValueError(f"Stock quantity cannot exceed {INT32_MAX}")
        return v

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_url_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("image_url")
    @classmethod
    def image_url_must_be_valid(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        _check_length(v, 500, "Image URL cannot exceed 500 characters")
        try:
            _URL_ADAPTER.validate_python(v)
        except ValidationError:
            raise ValueError("Please provide a valid URL") from None
        return v


class CreateProductDTO(_ProductWriteDTO):
    """Immutable DTO for product creation requests."""


class UpdateProductDTO(_ProductWriteDTO):
    """Immutable DTO for product update requests.

    An update is a full replacement of the mutable fields; ``id`` and
    ``createdAt`` in the payload are ignored.
    """


# ---------------------------------------------------------------------------
# Query DTO
# ---------------------------------------------------------------------------


class ProductQueryParameters(BaseModel):
    """Untrusted listing parameters as received from the query string.

    Blank values count as absent.  ``isActive`` defaults to ``true``;
    ``all``/``any``/blank disable the active-flag filter.  Paging values
    are not range-checked here: the service clamps them.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    page_number: int = Field(default=1, le=INT32_MAX)
    page_size: int = Field(default=10, le=INT32_MAX)
    search_term: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    sort_by: Optional[str] = "name"
    sort_order: Optional[str] = "asc"
    is_active: Optional[bool] = True

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if key in ("isActive", "is_active") and isinstance(value, str):
                if value.strip().lower() in _ANY_LIFECYCLE:
                    cleaned[key] = None
                    continue
            elif isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        return cleaned


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    stock_quantity: int
    category: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock_quantity=product.stock_quantity,
            category=product.category,
            brand=product.brand,
            image_url=product.image_url,
            is_active=product.is_active,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
