"""
Todo API Backend: Access Log Middleware
=========================================

What:  One access-log line per /todoitems request on the `todoapi.access`
       logger.
How:   After the route has run, the matched route's name (list_todos,
       create_todo, ...) and the `todo_id` path parameter are read back from
       the ASGI scope, so each line says which repository operation ran and
       on which item:

           PUT /todoitems/3f2a... 204 2.4ms op=update_todo todo=3f2a...

Levels:
    5xx            → ERROR
    404            → INFO (a missing item is an ordinary outcome)
    other 4xx      → WARNING
    everything else → INFO

/health is not logged. Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("todoapi.access")

UNLOGGED_PATHS = frozenset({"/health"})


def access_log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400 and status != 404:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        # The router writes the matched route and path params into the shared scope
        route = request.scope.get("route")
        operation = getattr(route, "name", None) or "-"
        todo_id = request.path_params.get("todo_id", "-")

        logger.log(
            access_log_level(response.status_code),
            "%s %s %d %.1fms op=%s todo=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            operation,
            todo_id,
        )
        return response
