import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("connector.access")

request_context: ContextVar[Optional[Request]] = ContextVar("request_context", default=None)

REQUEST_ID_HEADER = "X-Request-ID"


def current_request_id() -> str:
    """Request id of the request being handled, or an empty string outside one"""
    request = request_context.get()
    if request is None:
        return ""
    return getattr(request.state, "request_id", "")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Stores the current request in a context variable, tags it with a request id
    and writes one access log line per request.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        request.state.request_id = request_id
        token = request_context.set(request)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_context.reset(token)

        duration_ms = (time.perf_counter() - start) * 1000
        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            "%s %s %d %.1fms [%s]",
            request.method,
            request.url.path,
            status,
            duration_ms,
            request_id,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
