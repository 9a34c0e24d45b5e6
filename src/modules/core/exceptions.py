"""DRF exception handling that keeps every error inside the envelope.

``envelope_exception_handler`` is registered as DRF's
``EXCEPTION_HANDLER``.  It covers framework-raised errors (malformed
JSON, unsupported method, unknown route, auth hooks); anything that is
not an ``APIException`` is left to ``GlobalExceptionMiddleware``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.responses import ApiResponse, ErrorKind

logger = structlog.get_logger(__name__)

_MESSAGE_BY_STATUS: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Invalid request",
    status.HTTP_401_UNAUTHORIZED: "Unauthorized access",
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Resource not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: "Unsupported media type",
}


def validation_messages(exc: PydanticValidationError) -> List[str]:
    """Flatten a Pydantic ``ValidationError`` into readable messages.

    Messages raised by our own validators are passed through untouched;
    built-in type errors are prefixed with the offending field.
    """
    messages: List[str] = []
    for error in exc.errors():
        ctx = error.get("ctx") or {}
        if error["type"] == "value_error" and "error" in ctx:
            messages.append(str(ctx["error"]))
            continue
        field = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return messages


def _flatten_detail(detail: Any) -> List[str]:
    if isinstance(detail, dict):
        return [
            message
            for key, value in detail.items()
            for message in (
                _flatten_detail(value)
                if key in ("detail", "non_field_errors")
                else [f"{key}: {item}" for item in _flatten_detail(value)]
            )
        ]
    if isinstance(detail, list):
        return [message for item in detail for message in _flatten_detail(item)]
    return [str(detail)]


def envelope_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    response = exception_handler(exc, context)
    if response is None:
        return None

    if response.status_code == status.HTTP_404_NOT_FOUND:
        kind = ErrorKind.NOT_FOUND
    elif response.status_code >= 500:
        kind = ErrorKind.INTERNAL
    else:
        kind = ErrorKind.INVALID_INPUT

    message = _MESSAGE_BY_STATUS.get(response.status_code, "Request failed")
    envelope = ApiResponse.error_response(
        message, _flatten_detail(response.data), kind=kind
    )

    logger.warning(
        "api.client_error",
        status_code=response.status_code,
        error=type(exc).__name__,
    )

    response.data = envelope.to_wire()
    return response
