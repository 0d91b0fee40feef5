"""
Pharmacy Reference API - Main Application Entry Point
FDA drug labels with AI summaries, translations, interaction checks and
drug chat in English, Arabic and Sorani Kurdish
"""

# Load environment variables
import os
from dotenv import load_dotenv
load_dotenv()

import logging
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from pharmacy_api import __version__
from pharmacy_api.api.v1.api import api_router as v1_router
from pharmacy_api.config import get_settings
from pharmacy_api.di import ServiceContainer
from pharmacy_api.middleware import TimeoutMiddleware
from pharmacy_api.models import HealthCheckResponse
from pharmacy_api.utils.error_responses import error_json_response, format_validation_error

SERVICE_NAME = "Pharmacy Reference API"

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle management - startup and shutdown
    """
    logger.info("Initializing %s...", SERVICE_NAME)
    container = ServiceContainer(settings)
    await container.startup()
    app.state.container = container

    yield

    logger.info("Shutting down %s...", SERVICE_NAME)
    await container.shutdown()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=SERVICE_NAME,
    description="Multilingual drug reference backed by openFDA labels and AI summaries",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(v1_router, prefix=settings.api_prefix)

app.add_middleware(
    TimeoutMiddleware,
    timeout_seconds=settings.request_timeout_seconds,
    enabled=settings.timeout_middleware_enabled,
    api_prefix=settings.api_prefix,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID") or uuid.uuid4().hex
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


@app.get("/health", response_model=HealthCheckResponse, include_in_schema=False)
async def root_health():
    """
    Lightweight health check for container orchestration.
    """
    return {"status": "healthy", "service": SERVICE_NAME, "version": __version__}


# ==================== ERROR HANDLERS ====================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    correlation_id = getattr(request.state, "correlation_id", None)
    logger.warning("Validation error [%s] at %s: %s", correlation_id, request.url.path, exc.errors())
    payload = format_validation_error(exc.errors(), correlation_id=correlation_id, path=request.url.path)
    return JSONResponse(status_code=422, content=payload)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Unknown routes, wrong methods and any HTTPException raised by a route.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "HTTPException [%s] %s %s: %s",
        getattr(request.state, "correlation_id", None),
        exc.status_code,
        request.url.path,
        exc.detail,
    )
    return error_json_response(
        request,
        exc.status_code,
        exc.detail or "Request failed",
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Last-resort handler; the message only names the exception in DEBUG mode.
    """
    logger.error(
        "Unhandled exception [%s] at %s %s: %s",
        getattr(request.state, "correlation_id", None),
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )

    message = "An unexpected error occurred"
    if settings.debug:
        message = f"Internal server error: {type(exc).__name__}: {exc}"

    return error_json_response(request, 500, message, error_type="InternalError")


# ==================== MAIN ====================

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    logger.info("Starting %s on %s:%s", SERVICE_NAME, host, port)

    uvicorn.run(app, host=host, port=port)
