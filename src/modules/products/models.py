"""Product model with an explicit two-state lifecycle.

Rules implemented at the persistence layer:
- Price must be greater than zero (DB check constraint).
- Stock quantity cannot be negative (``PositiveIntegerField``).
- Deletion is soft: ``is_active`` flips to ``False``; rows are never removed
  by the API.
- ``created_at`` / ``updated_at`` are stamped explicitly by the mapping layer
  rather than by ``auto_now``; ``updated_at`` stays ``NULL`` until the first
  mutation.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.validators import MinValueValidator
from django.db import models

logger = structlog.get_logger(__name__)


class ProductLifecycle(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"

    @property
    def is_active(self) -> bool:
        return self is ProductLifecycle.ACTIVE

    @classmethod
    def from_flag(cls, is_active: bool) -> ProductLifecycle:
        return cls.ACTIVE if is_active else cls.INACTIVE


class ProductQuerySet(models.QuerySet):
    """QuerySet with lifecycle helpers."""

    def with_lifecycle(self, lifecycle: ProductLifecycle) -> ProductQuerySet:
        return self.filter(is_active=lifecycle.is_active)

    def active(self) -> ProductQuerySet:
        """Return only products visible in default listings."""
        return self.with_lifecycle(ProductLifecycle.ACTIVE)

    def inactive(self) -> ProductQuerySet:
        """Return only soft-deleted products."""
        return self.with_lifecycle(ProductLifecycle.INACTIVE)


class Product(models.Model):
    """Catalog product.

    The store keeps the boolean ``is_active`` column (it is part of the wire
    contract); ``lifecycle`` exposes it as a ``ProductLifecycle``.
    """

    name = models.CharField(max_length=200)
    description = models.CharField(max_length=1000, null=True, blank=True)  # noqa: DJ01
    price = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock_quantity = models.PositiveIntegerField(default=0)
    category = models.CharField(max_length=100, null=True, blank=True)  # noqa: DJ01
    brand = models.CharField(max_length=50, null=True, blank=True)  # noqa: DJ01
    image_url = models.URLField(max_length=500, null=True, blank=True)  # noqa: DJ01
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(null=True, blank=True, default=None)

    objects = ProductQuerySet.as_manager()

    class Meta:
        db_table = "products"
        ordering = ["name", "id"]
        indexes = [
            models.Index(fields=["name"], name="products_name_idx"),
            models.Index(fields=["category"], name="products_category_idx"),
            models.Index(fields=["brand"], name="products_brand_idx"),
            models.Index(fields=["is_active"], name="products_is_active_idx"),
            models.Index(fields=["created_at"], name="products_created_at_idx"),
            models.Index(
                fields=["category", "is_active"],
                name="products_category_active_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def lifecycle(self) -> ProductLifecycle:
        return ProductLifecycle.from_flag(self.is_active)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                name=self.name,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.id} - {self.name}"
