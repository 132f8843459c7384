# projecthub/middleware/logging.py
"""
Request logging middleware.

Binds a request id into structlog's context so every log line emitted
while handling the request (service, storage gateway, boto3 wrapper)
carries it, and echoes it back in the X-Request-ID header.
"""

import time
import uuid

import structlog
from fastapi import Request

from projecthub.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def logging_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    start = time.perf_counter()
    logger.info(
        "request started",
        client=request.client.host if request.client else None,
        # Multipart uploads: size of the whole body as announced by the client
        content_length=request.headers.get("content-length"),
    )

    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request failed", duration_ms=round((time.perf_counter() - start) * 1000, 2))
        raise

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    log = logger.warning if response.status_code >= 500 else logger.info
    log("request completed", status_code=response.status_code, duration_ms=duration_ms)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
