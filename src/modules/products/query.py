"""Query composition for product listings.

Turns untrusted listing parameters into a ``QueryPlan``: a backend-agnostic
filter spec (``FilterCondition`` / ``AnyOf``), a single allow-listed sort
field and a page window.  The plan is plain data; the repository adapter
interprets it against the store.

Composition rules:
- every supplied filter is ANDed; blank text filters are skipped.
- the free-text term matches name, description or brand (not category).
- category and brand are case-insensitive substring matches.
- price bounds are inclusive.
- unknown sort fields fall back to ``name``; only ``desc`` sorts descending.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Union

if TYPE_CHECKING:
    from modules.products.dtos import ProductQueryParameters

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

DEFAULT_SORT_FIELD = "name"

# Normalised client sort key -> model field.
SORT_FIELDS: Dict[str, str] = {
    "name": "name",
    "price": "price",
    "stock": "stock_quantity",
    "stockquantity": "stock_quantity",
    "category": "category",
    "brand": "brand",
    "createdat": "created_at",
}

TEXT_SEARCH_FIELDS: Tuple[str, ...] = ("name", "description", "brand")


class Operator(str, Enum):
    EQ = "eq"
    ICONTAINS = "icontains"
    GTE = "gte"
    LTE = "lte"


@dataclass(frozen=True)
class FilterCondition:
    field: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """OR group: a row qualifies if any of its conditions matches."""

    conditions: Tuple[FilterCondition, ...]


FilterSpec = Union[FilterCondition, AnyOf]


@dataclass(frozen=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    descending: bool = False


@dataclass(frozen=True)
class QueryPlan:
    filters: Tuple[FilterSpec, ...] = ()
    sort: SortSpec = SortSpec()
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


def clamp_paging(page_number: int, page_size: int) -> Tuple[int, int]:
    """Silently coerce out-of-range paging values to safe defaults."""
    if page_number < 1:
        page_number = DEFAULT_PAGE_NUMBER
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page_number, page_size


def resolve_sort(sort_by: Optional[str], sort_order: Optional[str]) -> SortSpec:
    descending = (sort_order or "").lower() == "desc"
    if not sort_by or not sort_by.strip():
        return SortSpec(DEFAULT_SORT_FIELD, descending)
    key = sort_by.strip().lower().replace("_", "").replace("-", "")
    return SortSpec(SORT_FIELDS.get(key, DEFAULT_SORT_FIELD), descending)


def _has_text(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def text_search(term: str, fields: Tuple[str, ...] = TEXT_SEARCH_FIELDS) -> AnyOf:
    return AnyOf(
        tuple(FilterCondition(field, Operator.ICONTAINS, term) for field in fields)
    )


def search_filters(term: str) -> Tuple[FilterSpec, ...]:
    """Dedicated search endpoint: active products, category included."""
    return (
        FilterCondition("is_active", Operator.EQ, True),
        text_search(term, TEXT_SEARCH_FIELDS + ("category",)),
    )


def category_filters(category: str) -> Tuple[FilterSpec, ...]:
    return (
        FilterCondition("is_active", Operator.EQ, True),
        FilterCondition("category", Operator.ICONTAINS, category),
    )


def brand_filters(brand: str) -> Tuple[FilterSpec, ...]:
    return (
        FilterCondition("is_active", Operator.EQ, True),
        FilterCondition("brand", Operator.ICONTAINS, brand),
    )


def build_query_plan(params: ProductQueryParameters) -> QueryPlan:
    """Compose the filter spec, sort and page window for a listing.

    Paging values are used as given; callers clamp them first.
    """
    filters = []

    if params.is_active is not None:
        filters.append(FilterCondition("is_active", Operator.EQ, params.is_active))

    if _has_text(params.search_term):
        filters.append(text_search(params.search_term))

    if _has_text(params.category):
        filters.append(
            FilterCondition("category", Operator.ICONTAINS, params.category)
        )

    if _has_text(params.brand):
        filters.append(FilterCondition("brand", Operator.ICONTAINS, params.brand))

    if params.min_price is not None:
        filters.append(FilterCondition("price", Operator.GTE, params.min_price))

    if params.max_price is not None:
        filters.append(FilterCondition("price", Operator.LTE, params.max_price))

    return QueryPlan(
        filters=tuple(filters),
        sort=resolve_sort(params.sort_by, params.sort_order),
        page_number=params.page_number,
        page_size=params.page_size,
    )
