"""Error types and handlers.

HTTP and validation errors use RFC 7807 problem+json (with an ``error``
message field for dashboard clients). Content store write failures keep the
``{success, error}`` payload shape the resource endpoints return on success.
"""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(self, status: int, title: str, detail: str):
        super().__init__(detail)
        self.status = status
        self.title = title
        self.detail = detail


class ContentStoreError(Exception):
    """The content document could not be read for update or written back."""


class DemoModeError(Exception):
    """Raised for any write while the site runs in demo mode."""

    def __init__(self, detail: str = "This action cannot be performed in demo mode"):
        super().__init__(detail)
        self.detail = detail


def _problem(request: Request, status: int, title: str, detail) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "type": "about:blank",
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url.path),
            "error": detail if isinstance(detail, str) else title,
        },
        media_type="application/problem+json",
    )


async def content_store_error_handler(request: Request, exc: ContentStoreError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


async def demo_mode_handler(request: Request, exc: DemoModeError) -> JSONResponse:
    return JSONResponse(
        status_code=403,
        content={"success": False, "demo": True, "error": exc.detail},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    title = exc.detail if isinstance(exc.detail, str) else "Error"
    return _problem(request, exc.status_code, title, exc.detail)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _problem(request, 422, "Validation Error", jsonable_encoder(exc.errors()))


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return _problem(request, exc.status, exc.title, exc.detail)
