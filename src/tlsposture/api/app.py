"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tlsposture.api.routers import health, ssl
from tlsposture.api.routers.ssl import ErrorResponse
from tlsposture.core.config import get_settings
from tlsposture.core.logging import get_logger, setup_logging
from tlsposture.version import __version__

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler."""
    setup_logging()
    yield


app = FastAPI(
    title="tlsposture API",
    description="TLS protocol, cipher and certificate posture evaluation",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies in the same shape as other client errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Malformed request")
    logger.info("request_rejected", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Invalid request",
            message=f"{location}: {message}" if location else message,
        ).model_dump(),
    )


# CORS middleware - configured via CORS_ORIGINS environment variable
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(ssl.router, prefix="/api/v1", tags=["SSL"])
