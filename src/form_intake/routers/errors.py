"""JSON error responses for the submission endpoint"""

from typing import Any

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from form_intake.logging_config import get_logger

logger = get_logger(__name__, component="submit-form")


class SubmissionError(Exception):
    """A request failure rendered as ``{"error": ..., **extra}``.

    Extra keyword arguments (details, missingFields, receivedKeys) are
    copied into the response body as-is.
    """

    def __init__(self, status_code: int, error: str, **extra: Any):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.extra = extra

    def to_dict(self) -> dict:
        return {"error": self.error, **self.extra}


async def submission_error_handler(request: Request, exc: SubmissionError):
    """Log and render a SubmissionError"""
    body = exc.to_dict()
    message = f"{request.method} {request.url.path} -> {exc.status_code}: {body}"
    if exc.status_code >= 500:
        logger.error(message)
    else:
        logger.warning(message)
    return JSONResponse(status_code=exc.status_code, content=body)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Render routing 405s (HEAD, TRACE, ...) like any other SubmissionError"""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    response = await submission_error_handler(
        request, SubmissionError(405, f"Method {request.method} not allowed")
    )
    if exc.headers and "Allow" in exc.headers:
        response.headers["Allow"] = exc.headers["Allow"]
    return response
