"""FastAPI middleware for request tracing and metrics"""

import re
import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from barcode_gateway.infrastructure.observability.metrics import request_duration_histogram

# Caller-supplied IDs end up in every log line, so only accept short token-like values
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,64}")

UNMATCHED_ROUTE = "unmatched"


def resolve_request_id(header_value: str | None) -> str:
    """Reuse a well-formed X-Request-ID from the caller, otherwise mint a UUID"""
    if header_value and _REQUEST_ID_PATTERN.fullmatch(header_value):
        return header_value
    return str(uuid.uuid4())


def route_template(request: Request) -> str:
    """
    Path template of the matched route, e.g. /v1/quota/{account_id}.

    Raw paths would create one metric series per account id (or per scanner
    probe), so anything that did not match a route collapses into one label.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate the caller's X-Request-ID, or mint one, for distributed tracing"""

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get("X-Request-ID"))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request latency labelled by route template"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        # Routing has filled scope["route"] by the time call_next returns
        request_duration_histogram.labels(
            method=request.method,
            endpoint=route_template(request),
            status=response.status_code,
        ).observe(time.perf_counter() - start_time)

        return response
