"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from cms import __version__
from cms.api.public import router as public_router
from cms.api.v1.router import api_v1_router
from cms.core.exceptions import (
    ContentStoreError,
    DemoModeError,
    ProblemDetailError,
    content_store_error_handler,
    demo_mode_handler,
    http_exception_handler,
    problem_detail_handler,
    validation_exception_handler,
)
from cms.core.middleware.cors import get_cors_config
from cms.core.middleware.request_id import RequestIdMiddleware

app = FastAPI(
    title="Section CMS API",
    version=__version__,
    docs_url="/docs",
    openapi_url="/openapi.json",
)

# Middleware (last added = first executed)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(CORSMiddleware, **get_cors_config())

# Exception handlers (RFC 7807 for HTTP/validation/editor errors)
app.add_exception_handler(ProblemDetailError, problem_detail_handler)
app.add_exception_handler(ContentStoreError, content_store_error_handler)
app.add_exception_handler(DemoModeError, demo_mode_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Routes
app.include_router(api_v1_router, prefix="/api/v1")
app.include_router(public_router)
