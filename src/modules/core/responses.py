"""Uniform response envelope shared by every API module.

- ``ErrorKind``: structured failure category carried by a failed envelope.
- ``ApiResponse``: ``{success, message, data, errors}`` wrapper returned by
  the Service Layer and rendered verbatim by the API layer.
- ``PagedResult``: page window plus total count for paginated listings.
- ``envelope_response``: picks the HTTP status from the envelope's kind.

Field names are camelCase on the wire; Python attributes stay snake_case.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel
from rest_framework import status
from rest_framework.response import Response

T = TypeVar("T")


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiResponse(BaseModel, Generic[T]):
    """Immutable success/failure envelope.

    ``kind`` never reaches the client; it only drives status selection.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    data: Optional[T] = None
    errors: Optional[List[str]] = None
    kind: Optional[ErrorKind] = Field(default=None, exclude=True)

    @classmethod
    def success_response(cls, data: Any, message: str = "") -> ApiResponse:
        return cls(success=True, message=message, data=data)

    @classmethod
    def error_response(
        cls,
        message: str,
        errors: Optional[List[str]] = None,
        kind: ErrorKind = ErrorKind.INTERNAL,
    ) -> ApiResponse:
        return cls(
            success=False,
            message=message,
            errors=list(errors or []),
            kind=kind,
        )

    @property
    def status_code(self) -> int:
        if self.success:
            return status.HTTP_200_OK
        return STATUS_BY_KIND[self.kind or ErrorKind.INTERNAL]

    def to_wire(self) -> Dict[str, Any]:
        """Python-mode dump so DRF's encoder renders Decimal as number."""
        return self.model_dump(by_alias=True)


class PagedResult(BaseModel, Generic[T]):
    """One page of items plus the filter-wide total count."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    items: List[T]
    total_count: int
    page_number: int
    page_size: int

    @computed_field(alias="totalPages")  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field(alias="hasPrevious")  # type: ignore[prop-decorator]
    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @computed_field(alias="hasNext")  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


def envelope_response(
    result: ApiResponse,
    success_status: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Render an envelope, mapping ``ErrorKind`` to the HTTP status."""
    code = success_status if result.success else result.status_code
    return Response(result.to_wire(), status=code, headers=headers)
