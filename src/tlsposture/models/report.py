"""Evaluation report models."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import Field

from tlsposture.models.base import ReportSchema, Severity
from tlsposture.models.certificate import CertificateRecord
from tlsposture.models.findings import CipherAnalysis, ProtocolAnalysis
from tlsposture.models.grade import PostureGrade
from tlsposture.models.handshake import HandshakeResult
from tlsposture.models.probe import ProtocolProbeResult


class ProtocolDetails(ReportSchema):
    """Supplementary protocol flags.

    ``None`` means the flag was not measured; the value is not a guess.
    """

    hsts: bool | None = None
    hsts_max_age: int | None = None
    hsts_include_subdomains: bool = False
    hsts_preload: bool = False
    compression: bool | None = None
    alpn: str | None = None
    ocsp_stapling: bool | None = None
    heartbeat: bool | None = None
    secure_renegotiation: bool | None = None


class Recommendation(ReportSchema):
    """A prioritized, actionable remediation item."""

    severity: Severity
    category: Literal["certificate", "protocol", "cipher", "configuration"]
    issue: str
    description: str
    remediation: str


class PostureReport(ReportSchema):
    """Complete posture evaluation for one target."""

    domain: str
    port: int = 443
    certificate: CertificateRecord
    tls_versions: dict[str, ProtocolProbeResult]
    cipher_analysis: CipherAnalysis
    protocol_analysis: ProtocolAnalysis
    protocol_details: ProtocolDetails = Field(default_factory=ProtocolDetails)
    supported_ciphers: dict[str, list[str]] = Field(default_factory=dict)
    handshake_simulations: list[HandshakeResult] = Field(default_factory=list)
    grading: PostureGrade
    recommendations: list[Recommendation] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration_seconds: float | None = None

    def to_json_dict(self) -> dict:
        """Serialise with camelCase keys for JSON output."""
        return self.model_dump(mode="json", by_alias=True)
