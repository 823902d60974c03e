import uuid
import time
from contextvars import ContextVar
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from config import logger

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns or propagates X-Request-ID and logs the start and end of each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        client = request.client.host if request.client else None
        logger.info(f"[{request_id}] {request.method} {request.url.path} started (client={client})")

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        duration = time.perf_counter() - start_time
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} "
            f"in {round(duration * 1000, 2)} ms"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response


def get_request_id() -> Optional[str]:
    return request_id_var.get()
