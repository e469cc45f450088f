"""
Request ID tracking.

Each request gets an id (the client's X-Request-ID header when supplied, a
fresh UUID otherwise). It is kept in a context variable for the duration of
the request so every log record emitted while handling it can carry the id,
and it is echoed back in the X-Request-ID response header.
"""

import logging
import uuid
from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_current_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        token = _current_request_id.set(request_id)
        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _current_request_id.reset(token)


class RequestIdLogFilter(logging.Filter):
    """Copies the active request id onto each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = _current_request_id.get()
        return True


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "no-request-id")
