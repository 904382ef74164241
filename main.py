"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. App is created by create_application(), which builds the database
     engine and session factory once and stores them on app.state.
  2. lifespan context manager runs on startup / shutdown.
  3. Middleware (request id, CORS) and routers are registered.
  4. Exception handlers turn typed AppErrors and request-body validation
     failures into stable JSON error codes and normalise unexpected errors.

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from managerh.api.routes import auth, computers, dashboard, employees
from managerh.core.config import settings
from managerh.core.errors import AppError, StorageUnavailable, ValidationError
from managerh.core.logging import configure_logging, get_logger
from managerh.core.middleware import RequestIdMiddleware
from managerh.db.session import build_engine, build_session_factory

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        debug=settings.DEBUG,
    )
    yield
    logger.info("Shutting down, disposing DB engine")
    await app.state.engine.dispose()


def _error_response(exc: AppError) -> JSONResponse:
    content = {"code": exc.code, "detail": exc.message}
    for key, value in exc.details.items():
        content.setdefault(key, value)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


# Where pydantic reports the failure, not part of the field name
REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


def _request_validation_error(exc: RequestValidationError) -> ValidationError:
    """
    Turn pydantic's error list into one ValidationError.
    The first failure gives the code; every failure is listed under "errors"
    without the submitted input, which may be a password.
    """
    errors = []
    for error in exc.errors():
        parts = [str(part) for part in error.get("loc", ()) if part not in REQUEST_LOCATIONS]
        errors.append(
            {
                "field": ".".join(parts) or "body",
                "rule": error.get("type", "invalid"),
                "message": error.get("msg", "Invalid value"),
            }
        )
    if not errors:
        return ValidationError("body", "invalid")

    first = errors[0]
    result = ValidationError(first["field"], first["rule"], first["message"])
    result.details["errors"] = errors
    return result


def create_application(database_url: Optional[str] = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Multi-tenant HR records: companies manage employees and "
            "computers with one computer per employee."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Database ─────────────────────────────────────────────────────────────
    app.state.engine = build_engine(database_url or settings.DATABASE_URL)
    app.state.session_factory = build_session_factory(app.state.engine)

    # ── Middleware ───────────────────────────────────────────────────────────
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(employees.router)
    app.include_router(computers.router)

    # ── Exception Handlers ────────────────────────────────────────────────────

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Request failed",
            path=request.url.path,
            method=request.method,
            code=exc.code,
            status_code=exc.status_code,
        )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = _request_validation_error(exc)
        logger.info(
            "Request rejected",
            path=request.url.path,
            method=request.method,
            code=error.code,
            error_count=len(error.details.get("errors", [])),
        )
        return _error_response(error)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.error(
            "Storage failure",
            path=request.url.path,
            method=request.method,
            error=type(exc).__name__,
            exc_info=True,
        )
        return _error_response(StorageUnavailable())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=type(exc).__name__,
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"code": "internal_error", "detail": "Internal server error"},
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"status": "ok", "app": settings.APP_NAME, "env": settings.APP_ENV}

    return app


app = create_application()
