"""
Core middleware.
"""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from apps.core.logging import bind_contextvars, clear_contextvars
from apps.core.utils import get_client_ip

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    """
    Binds request-scoped logging context.

    Every log line emitted while the request is processed carries the trace id,
    method, path and client IP. The trace id is taken from the X-Request-ID
    header when present and echoed back on the response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        trace_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        clear_contextvars()
        bind_contextvars(
            trace_id=trace_id,
            **{
                "http.method": request.method,
                "http.path": request.path,
                "network.client.ip": get_client_ip(request),
            },
        )
        try:
            response = self.get_response(request)
        finally:
            clear_contextvars()

        response[REQUEST_ID_HEADER] = trace_id
        return response
