"""Product domain exceptions.

Raised inside the Service Layer when a request cannot be fulfilled.
They never leave ``ProductService``: its public operations convert them
into failed ``ApiResponse`` envelopes carrying the matching ``ErrorKind``.
"""

from __future__ import annotations

from typing import List, Optional


class InvalidProductInput(Exception):
    """The caller supplied an unusable value (non-positive ID, blank term)."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])


class ProductNotFound(Exception):
    """No product row exists for the requested ID."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class ProductWriteFailed(Exception):
    """The store accepted the call but reported that no row changed."""
