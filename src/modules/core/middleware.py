import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()

QUIET_PATHS = frozenset({"/health"})


class CorrelationIdMiddleware:
    """Tag every request with a correlation ID and log its outcome.

    The ID is taken from ``X-Request-ID`` (or ``X-Correlation-ID``, which
    some shop-floor tablets send) and generated as a UUID4 otherwise.  It is
    bound into structlog's context variables so every log line emitted while
    handling the request carries it, and echoed back in ``X-Request-ID``.
    Health probes are not logged.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = (
            request.META.get("HTTP_X_REQUEST_ID")
            or request.META.get("HTTP_X_CORRELATION_ID")
            or str(uuid.uuid4())
        )
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        quiet = request.path in QUIET_PATHS
        if not quiet:
            logger.info(
                "request_started",
                method=request.method,
                path=request.get_full_path(),
            )

        started = time.monotonic()
        response = self.get_response(request)

        if not quiet:
            logger.info(
                "request_finished",
                method=request.method,
                path=request.get_full_path(),
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )

        response["X-Request-ID"] = cid
        return response
