# monthly_reports/core/errors.py
"""
Error taxonomy for the reports API and the handlers that render it.

Every error leaves the service as ``{"message": ...}``; routes that answer
with a ``success`` envelope raise with ``envelope=True`` so failures read
``{"success": false, "message": ...}``. Request validation and unexpected
failures on those routes keep the same envelope.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Routes that answer with a `{success, message}` envelope, errors included
ENVELOPE_PATHS = ("/api/reports/add-answers", "/api/reports/add-day")


def _message_body(request: Request, message: str) -> dict:
    if request.url.path.rstrip("/") in ENVELOPE_PATHS:
        return {"success": False, "message": message}
    return {"message": message}


class ReportAPIError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None, envelope: bool = False):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.envelope = envelope

    def to_dict(self) -> dict:
        if self.envelope:
            return {"success": False, "message": self.message}
        return {"message": self.message}


class ValidationError(ReportAPIError):
    """Missing or malformed fields in a request body."""
    status_code = 400


class NotFoundError(ReportAPIError):
    """No report (or day) matches the requested key."""
    status_code = 404


class StoreError(ReportAPIError):
    """The database failed; details stay in the server log."""
    status_code = 500


async def report_api_error_handler(request: Request, exc: ReportAPIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content=_message_body(request, message))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_message_body(request, "Something went wrong!"))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReportAPIError, report_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
