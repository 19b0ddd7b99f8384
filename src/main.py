"""daily-tasks - daily check-in tracker for a fixed set of recurring tasks."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.config import Constants, settings
from src.core.db_client import close_connection, init_db
from src.core.errors import DailyTasksError, ErrorCode, classify_error
from src.core.logging import SERVICE_VERSION, configure_logfire, instrument_fastapi
from src.interface.api_router import router as api_router
from src.services.record_store import SqliteRecordStore


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()

    await init_db()
    app.state.record_store = SqliteRecordStore()
    logger.info("Database initialized", extra={"db_path": settings.sqlite_db_path})

    yield
    # Shutdown
    await close_connection()


app = FastAPI(
    title="daily-tasks",
    description="Daily check-in tracker with scores and rolling statistics",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(api_router)


@app.exception_handler(DailyTasksError)
async def handle_domain_error(request: Request, exc: DailyTasksError) -> JSONResponse:
    """Turn domain errors into structured JSON responses."""
    response = classify_error(exc)
    level = logging.WARNING if response.status_code < Constants.HTTP_SERVER_ERROR else logging.ERROR
    logger.log(
        level,
        "request_failed",
        extra={"path": request.url.path, "code": response.code, "error": response.message},
    )
    return JSONResponse(content=response.to_payload(), status_code=response.status_code)


@app.exception_handler(RequestValidationError)
async def handle_bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400s."""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "bad_request"
    logger.warning("request_rejected", extra={"path": request.url.path, "error": message})
    return JSONResponse(
        content={"error": message, "code": ErrorCode.ERR_BAD_REQUEST},
        status_code=Constants.HTTP_BAD_REQUEST,
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Report unhandled failures with the same structured body as domain errors."""
    response = classify_error(exc)
    logger.exception("request_crashed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(content=response.to_payload(), status_code=response.status_code)
