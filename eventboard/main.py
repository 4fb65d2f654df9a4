from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import structlog
import time

from eventboard.core.config import settings
from eventboard.core.database import database, init_database
from eventboard.core.errors import AppError, InternalError
from eventboard.core.logging import configure_logging
from eventboard.core.migrations import run_migrations
from eventboard.api import events, users

configure_logging(settings.log_level, settings.log_json)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events"""
    logger.info("application_startup", app_name=settings.app_name)
    await init_database()
    try:
        # MigrationFailed propagates and aborts startup
        await run_migrations(database)
        yield
    finally:
        await database.disconnect()
        logger.info("application_shutdown")


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    lifespan=lifespan
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if not isinstance(exc, InternalError):
        logger.info(
            "request_rejected",
            method=request.method,
            path=request.url.path,
            error=type(exc).__name__
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("request_invalid", method=request.method, path=request.url.path, errors=len(exc.errors()))
    messages = [
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "invalid request"}
    )


# Middleware for logging requests
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(duration * 1000, 2)
    )

    return response


# Include routers
app.include_router(users.router)
app.include_router(events.router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "app": settings.app_name}
