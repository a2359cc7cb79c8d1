"""SSL/TLS evaluation endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from tlsposture.core.config import get_settings
from tlsposture.core.exceptions import (
    AnalysisError,
    ConnectivityError,
    EvaluationTimeoutError,
    ValidationError,
)
from tlsposture.core.logging import get_logger
from tlsposture.models import EvaluationOptions, PostureReport, TargetHost
from tlsposture.scanners.tls import TLSPostureScanner

router = APIRouter()
logger = get_logger("api")


class CheckRequest(BaseModel):
    """Request to evaluate a host."""

    domain: str | None = Field(
        default=None, examples=["example.com", "https://example.com/path"]
    )
    port: int | None = Field(default=None, ge=1, le=65535)
    enumerate_ciphers: bool | None = Field(default=None, alias="enumerateCiphers")
    check_hsts: bool | None = Field(default=None, alias="checkHsts")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error payload."""

    error: str
    message: str


def get_scanner() -> TLSPostureScanner:
    """Scanner dependency, overridable in tests."""
    return TLSPostureScanner()


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


@router.post(
    "/ssl/check",
    response_model=PostureReport,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def check_ssl(
    request: CheckRequest,
    scanner: TLSPostureScanner = Depends(get_scanner),
) -> PostureReport | JSONResponse:
    """
    Evaluate the TLS posture of a host.

    Accepts a bare hostname or an http(s) URL; only the hostname is used.
    """
    try:
        target = TargetHost.from_input(
            request.domain, port=request.port or get_settings().default_port
        )
    except ValidationError as e:
        return _error(400, "Invalid domain", e.message)

    options = EvaluationOptions(
        enumerate_ciphers=request.enumerate_ciphers,
        check_hsts=request.check_hsts,
    )

    try:
        return await scanner.scan(target, options)
    except ValidationError as e:
        return _error(400, "Invalid domain", e.message)
    except ConnectivityError as e:
        return _error(400, "Cannot connect to host", e.message)
    except EvaluationTimeoutError as e:
        return _error(504, "Evaluation timed out", e.message)
    except AnalysisError:
        logger.exception("analysis_error", target=target.identifier)
        return _error(500, "Failed to check SSL certificate", "Internal analysis error")
    except Exception:
        logger.exception("ssl_check_error", target=target.identifier)
        return _error(500, "Failed to check SSL certificate", "Unexpected internal error")
