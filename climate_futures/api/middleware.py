"""Request tracing middleware and error rendering.

Provides:
- ``X-Request-ID`` response header for tracing
- Request logging with hashed client IP
- ``{"error": ...}`` payloads for the climate-futures exception taxonomy
- 400 ``{"error": ...}`` payloads for malformed request bodies
"""

import hashlib
import logging
import time
import uuid

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from climate_futures.utils import ClimateFuturesError, InvalidInput

logger = logging.getLogger(__name__)


def _hash_ip(ip: str | None) -> str:
    """Return a one-way hash of the client IP for privacy-safe logging."""
    if not ip:
        return "unknown"
    return hashlib.sha256(ip.encode()).hexdigest()[:12]


async def request_logging_middleware(request: Request, call_next):
    """Add X-Request-ID header and log every request with timing."""
    request_id = str(uuid.uuid4())
    start = time.monotonic()

    response: Response = await call_next(request)

    elapsed_ms = int((time.monotonic() - start) * 1000)
    response.headers["X-Request-ID"] = request_id

    logger.info(
        "request_id=%s ip=%s method=%s path=%s status=%d duration_ms=%d",
        request_id,
        _hash_ip(request.client.host if request.client else None),
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


async def climate_futures_error_handler(request: Request, exc: ClimateFuturesError) -> JSONResponse:
    """Render a taxonomy error as ``{"error": message}`` with its status code."""
    if exc.status_code >= 500:
        logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as ``InvalidInput`` (400) rather than 422."""
    errors = exc.errors()
    if not errors:
        return await climate_futures_error_handler(request, InvalidInput("Invalid request"))
    first = errors[0]
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid {location}: {first['msg']}" if location else first["msg"]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return await climate_futures_error_handler(request, InvalidInput(message))
