import time
import logging
import re
import uuid
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"

# Ids passed in by a calling host are only echoed when they look like ids
CLIENT_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

def resolve_request_id(request: Request) -> str:
    """Reuse the caller's request id when it is well formed, else make a short one"""
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if CLIENT_REQUEST_ID.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]

class LoggingMiddleware(BaseHTTPMiddleware):
    """Request tracking for assessment and recommendation calls"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Tag the request so a scoring call can be followed through the logs
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        # Log incoming request
        client = request.client.host if request.client else "unknown"
        logger.info(f"Request {request_id}: {request.method} {request.url.path} from {client}")

        try:
            # Hand over to the routes
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Error {request_id}: {e} after {time.perf_counter() - started:.3f}s",
                exc_info=True
            )
            raise

        elapsed = time.perf_counter() - started

        # Log the outcome
        logger.info(f"Response {request_id}: {response.status_code} in {elapsed:.3f}s")

        # Tracking headers, exposed to browsers through CORS below
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed:.3f}s"
        return response

def setup_middleware(app: FastAPI) -> None:
    """Install CORS, compression and request logging"""
    from ..config import settings

    # CORS middleware; the API is read and submit only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, RESPONSE_TIME_HEADER]
    )

    # Career catalogs can be large; compress them
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Added last so it wraps the others and times the whole request
    app.add_middleware(LoggingMiddleware)

    logger.info("Middleware setup complete")
