import time
import uuid

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

logger = structlog.get_logger(__name__)


class RequestLogMiddleware:
    """Bind a request id to the log context and log each API request once."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        clear_contextvars()
        request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
        bind_contextvars(request_id=request_id, method=request.method, path=request.path)
        started = time.monotonic()
        try:
            response = self.get_response(request)
        finally:
            clear_contextvars()
        if request.path.startswith('/api/'):
            logger.info(
                'request_finished',
                request_id=request_id,
                method=request.method,
                path=request.path,
                status=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 1),
            )
        response['X-Request-ID'] = request_id
        return response
