"""Core module - configuration, logging, and interfaces."""

from tlsposture.core.config import Settings, get_settings
from tlsposture.core.exceptions import (
    TLSPostureError,
    ValidationError,
    ConnectivityError,
    HostResolutionError,
    HostUnreachableError,
    EvaluationTimeoutError,
    AnalysisError,
    MissingCertificateError,
    CertificateParseError,
    GradingError,
    ConfigurationError,
)

__all__ = [
    "Settings",
    "get_settings",
    "TLSPostureError",
    "ValidationError",
    "ConnectivityError",
    "HostResolutionError",
    "HostUnreachableError",
    "EvaluationTimeoutError",
    "AnalysisError",
    "MissingCertificateError",
    "CertificateParseError",
    "GradingError",
    "ConfigurationError",
]
