import traceback
import uuid
from contextvars import ContextVar
from typing import Callable, Optional

import structlog
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from rest_framework.utils.encoders import JSONEncoder

from modules.core.responses import ApiResponse, ErrorKind

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()


class CorrelationIdMiddleware:
    """Middleware that extracts or generates a correlation ID for each request.

    Reads X-Request-ID header from the incoming request. If absent,
    generates a new UUID4. The ID is stored in a ContextVar so structlog
    processors can inject it into every log line, and is returned to the
    client via the X-Request-ID response header.  Failure responses
    (status >= 400) also carry it as X-Correlation-ID.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )

        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
        )

        response["X-Request-ID"] = cid
        if response.status_code >= 400:
            response["X-Correlation-ID"] = cid
        return response


class GlobalExceptionMiddleware:
    """Last-resort boundary: no unhandled exception reaches the client raw.

    Anything escaping a view (DRF re-raises non-API exceptions) is logged
    with its traceback and rendered as a 500 envelope.  With
    ``API_VERBOSE_ERRORS`` the envelope carries the exception text and
    traceback; otherwise the message is generic.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(
        self, request: HttpRequest, exception: Exception
    ) -> Optional[HttpResponse]:
        logger.error(
            "unhandled_exception",
            path=request.path,
            error=type(exception).__name__,
            exc_info=exception,
        )

        if getattr(settings, "API_VERBOSE_ERRORS", False):
            detail = "".join(
                traceback.format_exception(
                    type(exception), exception, exception.__traceback__
                )
            )
            envelope = ApiResponse.error_response(
                str(exception) or type(exception).__name__,
                [str(exception), detail],
                kind=ErrorKind.INTERNAL,
            )
        else:
            envelope = ApiResponse.error_response(
                "An internal server error occurred.",
                ["Please contact support if the problem persists."],
                kind=ErrorKind.INTERNAL,
            )

        return JsonResponse(
            envelope.to_wire(),
            status=envelope.status_code,
            encoder=JSONEncoder,
        )
