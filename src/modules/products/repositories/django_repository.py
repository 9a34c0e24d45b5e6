"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API and is the
only place where a ``QueryPlan`` filter spec becomes ORM ``Q`` objects.
Error handling follows the Null Object pattern: look-ups return ``None``
and writes return a "did anything change" flag instead of raising; the
Service Layer decides how to translate that into an API response.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import structlog
from django.db.models import Q
from django.utils import timezone

from modules.products.models import Product, ProductQuerySet
from modules.products.query import (
    AnyOf,
    FilterCondition,
    FilterSpec,
    Operator,
    QueryPlan,
    SortSpec,
    brand_filters,
    category_filters,
    search_filters,
)
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_LOOKUPS = {
    Operator.EQ: "exact",
    Operator.ICONTAINS: "icontains",
    Operator.GTE: "gte",
    Operator.LTE: "lte",
}

# Columns an update overwrites; ``id`` and ``created_at`` are never touched.
_MUTABLE_FIELDS = (
    "name",
    "description",
    "price",
    "stock_quantity",
    "category",
    "brand",
    "image_url",
    "is_active",
    "updated_at",
)


def _condition_to_q(condition: FilterCondition) -> Q:
    lookup = _LOOKUPS[condition.operator]
    return Q(**{f"{condition.field}__{lookup}": condition.value})


def to_q(spec: FilterSpec) -> Q:
    """Translate one filter spec entry into a Django ``Q`` object."""
    if isinstance(spec, AnyOf):
        combined = Q()
        for condition in spec.conditions:
            combined |= _condition_to_q(condition)
        return combined
    return _condition_to_q(spec)


def order_by_args(sort: SortSpec) -> Tuple[str, str]:
    """Sort field plus an ``id`` tie-break so page boundaries are stable."""
    prefix = "-" if sort.descending else ""
    return f"{prefix}{sort.field}", "id"


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _filtered(self, filters: Iterable[FilterSpec]) -> ProductQuerySet:
        queryset = Product.objects.all()
        for spec in filters:
            queryset = queryset.filter(to_q(spec))
        return queryset

    def _list_by_name(self, filters: Iterable[FilterSpec]) -> List[Product]:
        return list(self._filtered(filters).order_by("name", "id"))

    def get_all(self) -> List[Product]:
        return list(Product.objects.active().order_by("name", "id"))

    def get_paged(self, plan: QueryPlan) -> Tuple[List[Product], int]:
        """Count matches first, then sort and slice the page window."""
        queryset = self._filtered(plan.filters)
        total_count = queryset.count()
        window = queryset.order_by(*order_by_args(plan.sort))[
            plan.offset : plan.offset + plan.page_size
        ]
        return list(window), total_count

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key, active or not."""
        return Product.objects.filter(id=id).first()

    def exists(self, id: int) -> bool:
        return Product.objects.filter(id=id).exists()

    def search(self, term: str) -> List[Product]:
        if not term or not term.strip():
            return []
        return self._list_by_name(search_filters(term))

    def get_by_category(self, category: str) -> List[Product]:
        if not category or not category.strip():
            return []
        return self._list_by_name(category_filters(category))

    def get_by_brand(self, brand: str) -> List[Product]:
        if not brand or not brand.strip():
            return []
        return self._list_by_name(brand_filters(brand))

    def get_count(self) -> int:
        return Product.objects.active().count()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, entity: Product) -> Product:
        """Insert a new product; the database assigns its ID."""
        if entity.created_at is None:
            entity.created_at = timezone.now()
        entity.save(force_insert=True)
        return entity

    def update(self, entity: Product) -> Optional[Product]:
        """Overwrite the mutable columns of an existing row.

        Returns the refreshed product, or ``None`` when no row changed.
        """
        if entity.updated_at is None:
            entity.updated_at = timezone.now()
        changed = Product.objects.filter(id=entity.id).update(
            **{field: getattr(entity, field) for field in _MUTABLE_FIELDS}
        )
        if not changed:
            return None
        return self.get_by_id(entity.id)

    def delete(self, id: int) -> bool:
        """Soft-delete a product by ID.

        Returns ``True`` if a row was marked inactive, ``False`` if no
        product exists with the given ID.
        """
        changed = Product.objects.filter(id=id).update(
            is_active=False, updated_at=timezone.now()
        )
        if changed:
            logger.info("product.soft_deleted", product_id=id)
        return bool(changed)
