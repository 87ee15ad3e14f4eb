# monthly_reports/core/logging.py
"""
Request-scoped logging.

Every log record is stamped with the id of the request being served and the
authenticated user (when known), both kept in context variables so handlers
and services can keep using plain ``logging.getLogger(__name__)``.
"""
import logging
import sys
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s user=%(user_id)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def set_user_id(user_id) -> None:
    user_id_var.set(str(user_id) if user_id is not None else "")


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestContextFilter(logging.Filter):
    """Copies the context variables onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        record.user_id = user_id_var.get() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid stacking handlers when the app module is imported more than once
    for handler in root.handlers:
        if getattr(handler, "_monthly_reports", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestContextFilter())
    handler._monthly_reports = True
    root.addHandler(handler)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a request id (or reuses X-Request-ID) and logs each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or generate_request_id()
        request_token = request_id_var.set(request_id)
        user_token = user_id_var.set("")
        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s -> %s (%.1fms)",
                request.method, request.url.path, response.status_code, duration_ms,
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            user_id_var.reset(user_token)
            request_id_var.reset(request_token)
