"""Custom exceptions for tlsposture."""


class TLSPostureError(Exception):
    """Base exception for all tlsposture errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TLSPostureError, ValueError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class ConnectivityError(TLSPostureError):
    """Raised when the target host cannot be reached at all."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.target = target


class HostResolutionError(ConnectivityError):
    """Raised when the target hostname does not resolve."""

    pass


class HostUnreachableError(ConnectivityError):
    """Raised when no protocol version yields a TLS handshake."""

    pass


class EvaluationTimeoutError(TLSPostureError):
    """Raised when an evaluation exceeds its overall deadline."""

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.timeout = timeout


class AnalysisError(TLSPostureError):
    """Raised when analysis receives malformed input."""

    pass


class MissingCertificateError(AnalysisError):
    """Raised when no peer certificate is available for evaluation."""

    pass


class CertificateParseError(AnalysisError):
    """Raised when the peer certificate cannot be decoded."""

    pass


class GradingError(AnalysisError):
    """Raised when grading inputs are missing or out of range."""

    pass


class ConfigurationError(TLSPostureError):
    """Raised when configuration is invalid."""

    pass
