import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from services.metrics import increment_http_requests
from services.observability import set_request_id

logger = logging.getLogger("ecopayout.http")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start = time.time()

        request.state.request_id = req_id
        set_request_id(req_id)

        response = None
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = req_id
            return response
        finally:
            duration_ms = int((time.time() - start) * 1000)
            status = getattr(response, "status_code", 500)
            increment_http_requests(request.url.path, status)

            # sender header is a public address, safe to log
            logger.info(
                "http_request_end method=%s path=%s status=%s duration_ms=%s sender=%s",
                request.method,
                request.url.path,
                status,
                duration_ms,
                request.headers.get("X-Sender") or "-",
            )
            set_request_id(None)
