"""
Todo API Backend: Request ID Middleware
=========================================

What:  Binds a correlation ID to each request and returns it in X-Request-ID.
How:   An inbound X-Request-ID is reused when it is a short token of
       letters, digits, '.', '_' or '-'; anything else is replaced by an
       8-character UUID prefix. The ID lives in a ContextVar, and
       RequestIDLogFilter copies it onto every log record so the
       `[%(request_id)s]` field of the log format is filled in.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Values are echoed into headers and log lines
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(inbound: Optional[str]) -> str:
    """Return the caller's ID if it is a safe token, else a fresh one."""
    if inbound and _VALID_REQUEST_ID.match(inbound):
        return inbound
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """Stamps `record.request_id` ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
