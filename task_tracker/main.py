"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from task_tracker.config import Settings, get_settings
from task_tracker.errors import TaskStoreError, TaskValidationError
from task_tracker.logging_config import setup_logging
from task_tracker.models import ErrorDetail, ErrorResponse, HealthResponse
from task_tracker.routes import router
from task_tracker.store import TaskStore

logger = logging.getLogger(__name__)


def error_response(status_code: int, detail: ErrorDetail) -> JSONResponse:
    body = ErrorResponse(error=detail).model_dump(by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


async def handle_store_error(request: Request, exc: TaskStoreError) -> JSONResponse:
    details = None
    if isinstance(exc, TaskValidationError):
        details = [
            {"field": v.field, "reason": v.reason, "message": v.message}
            for v in exc.violations
        ]
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return error_response(exc.status_code, ErrorDetail(message=exc.message, code=exc.code, details=details))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]),
            "reason": err["type"],
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    message = details[0]["message"] if details else "Invalid request"
    logger.info("%s %s -> VALIDATION_ERROR: %s", request.method, request.url.path, message)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorDetail(message=message, code=TaskValidationError.code, details=details),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorDetail(message="Internal server error", code="INTERNAL_ERROR"),
    )


def create_app(store: TaskStore | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the API around ``store`` (a fresh empty one by default)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task Manager API",
        description="An in-memory task tracker with filtering and statistics.",
        version=settings.app_version,
    )
    app.state.store = store if store is not None else TaskStore()
    app.state.settings = settings

    # Registered before CORS so 500 responses still get CORS headers
    @app.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_unexpected_error(request, exc)

    # Configure CORS for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskStoreError, handle_store_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    @app.get("/", response_class=PlainTextResponse, tags=["System"])
    async def root() -> str:
        return "Task Manager API - Ready"

    @app.get("/api/health", response_model=HealthResponse, tags=["System"])
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(version=settings.app_version, tasks=len(request.app.state.store))

    app.include_router(router)
    logger.info("Task Manager API %s configured", settings.app_version)
    return app
