"""FastAPI application factory for the rebalancing API."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from config.settings import settings
from src.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from src.strategy import StrategyError

# Rate limiter (shared instance)
limiter = Limiter(key_func=get_remote_address)


def _format_validation_error(exc: RequestValidationError) -> str:
    """First validation error as ``field: message``."""
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    # Drop the "body"/"query" prefix, keep the field path
    loc = ".".join(str(part) for part in first.get("loc", ())[1:])
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


async def _validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": _format_validation_error(exc)})


async def _strategy_error_handler(_request: Request, exc: StrategyError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[API] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title="Portfolio Rebalancer API",
        version="0.1.0",
        docs_url="/docs" if settings.api_debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.api_debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Uniform {"error": ...} bodies
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StrategyError, _strategy_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Import and include routers
    from src.api.routers.health import router as health_router
    from src.api.routers.snapshots import router as snapshots_router
    from src.api.routers.strategy import router as strategy_router

    app.include_router(health_router)
    app.include_router(strategy_router)
    app.include_router(snapshots_router)

    return app
