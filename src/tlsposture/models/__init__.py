"""Pydantic data models for tlsposture."""

from tlsposture.models.base import (
    BaseSchema,
    ReportSchema,
    Severity,
    TLSVersionId,
    TLS_VERSIONS,
)
from tlsposture.models.target import EvaluationOptions, TargetHost, extract_hostname
from tlsposture.models.probe import (
    NegotiatedCipher,
    EphemeralKey,
    PlatformSupport,
    VersionCompatibility,
    ProtocolProbeResult,
)
from tlsposture.models.certificate import CertificateRecord
from tlsposture.models.findings import (
    CipherFinding,
    CipherProperties,
    CipherDetails,
    CipherAnalysis,
    ProtocolAnalysis,
)
from tlsposture.models.grade import PostureGrade
from tlsposture.models.handshake import ClientProfile, HandshakeResult
from tlsposture.models.report import (
    ProtocolDetails,
    Recommendation,
    PostureReport,
)

__all__ = [
    # Base
    "BaseSchema",
    "ReportSchema",
    "Severity",
    "TLSVersionId",
    "TLS_VERSIONS",
    # Target
    "TargetHost",
    "EvaluationOptions",
    "extract_hostname",
    # Probe
    "NegotiatedCipher",
    "EphemeralKey",
    "PlatformSupport",
    "VersionCompatibility",
    "ProtocolProbeResult",
    # Certificate
    "CertificateRecord",
    # Analysis
    "CipherFinding",
    "CipherProperties",
    "CipherDetails",
    "CipherAnalysis",
    "ProtocolAnalysis",
    # Grading
    "PostureGrade",
    # Handshake simulation
    "ClientProfile",
    "HandshakeResult",
    # Report
    "ProtocolDetails",
    "Recommendation",
    "PostureReport",
]
