import time
import uuid

import structlog

logger = structlog.get_logger("request")


class RequestLoggingMiddleware:
    """Log one ``http_request`` event per request and echo ``X-Request-ID``.

    The request id is bound to the structlog context so service-level
    events logged while handling the request carry it too.
    """
    SKIP_PATHS = ('/healthz', '/metrics')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = (request.META.get("HTTP_X_REQUEST_ID") or uuid.uuid4().hex[:8])[:64]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = round((time.monotonic() - start) * 1000, 2)

        if request.path not in self.SKIP_PATHS:
            status_code = response.status_code
            if status_code >= 500:
                log_func = logger.error
            elif status_code >= 400:
                log_func = logger.warning
            else:
                log_func = logger.info
            log_func(
                "http_request",
                method=request.method,
                path=request.path,
                status_code=status_code,
                duration_ms=duration_ms,
                query_params=request.META.get("QUERY_STRING", "")[:200] or None,
            )

        response["X-Request-ID"] = request_id
        structlog.contextvars.clear_contextvars()
        return response
