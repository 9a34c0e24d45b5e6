"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).  Identifiers are store-assigned
    integers.
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def exists(self, id: int) -> bool:
        """Cheap presence check that does not load the entity."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Persist a new entity; the store assigns its ID."""

    @abstractmethod
    def update(self, entity: T) -> Optional[T]:
        """Overwrite the mutable fields of an existing entity.

        Returns ``None`` when no row was changed.
        """

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove an entity by ID (soft or hard delete).

        Returns ``True`` only if a row was changed.
        """
