"""Product repository interface.

Extends ``IRepository[Product]`` with the listing and lookup operations
used by ``ProductService``.  Filtered reads receive a backend-agnostic
``QueryPlan`` (or filter spec) built by ``modules.products.query``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.products.query import QueryPlan


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_all(self) -> List[Product]:
        """Active products ordered by name."""

    @abstractmethod
    def get_paged(self, plan: QueryPlan) -> Tuple[List[Product], int]:
        """Return one sorted page window and the filter-wide total count."""

    @abstractmethod
    def search(self, term: str) -> List[Product]:
        """Active products whose text fields contain ``term``."""

    @abstractmethod
    def get_by_category(self, category: str) -> List[Product]:
        """Active products whose category contains ``category``."""

    @abstractmethod
    def get_by_brand(self, brand: str) -> List[Product]:
        """Active products whose brand contains ``brand``."""

    @abstractmethod
    def get_count(self) -> int:
        """Number of active products."""
