"""Per-version connection probe models."""

from typing import Literal

from pydantic import Field, computed_field, model_validator

from tlsposture.models.base import ReportSchema, TLSVersionId

# Error descriptors for unsupported versions
PROTOCOL_NOT_OFFERED = "protocol not offered"
PROBE_TIMEOUT = "timeout"
CONNECTION_REFUSED = "connection refused"
CONNECTION_RESET = "connection reset"


class NegotiatedCipher(ReportSchema):
    """Cipher suite negotiated during a handshake."""

    name: str
    protocol: str | None = None
    bits: int | None = None
    aead: bool = False
    forward_secrecy: bool = False


class EphemeralKey(ReportSchema):
    """Key exchange parameters of a handshake."""

    algorithm: Literal["ECDHE", "DHE", "RSA", "unknown"]
    size: int | None = None


class PlatformSupport(ReportSchema):
    """Support range of one browser or platform for a protocol version."""

    min: str | None = None
    max: str | None = None
    current: bool = False
    status: Literal["deprecated", "supported", "recommended", "unsupported"]


class VersionCompatibility(ReportSchema):
    """Browser and device support for a protocol version."""

    browsers: dict[str, PlatformSupport] = Field(default_factory=dict)
    devices: dict[str, PlatformSupport] = Field(default_factory=dict)


class ProtocolProbeResult(ReportSchema):
    """Outcome of one pinned-version handshake attempt."""

    version: TLSVersionId
    supported: bool = False
    cipher: NegotiatedCipher | None = None
    ephemeral_key: EphemeralKey | None = None
    negotiated_protocol: str | None = None
    latency_ms: float | None = None
    error: str | None = None
    browser_compat: dict[str, PlatformSupport] = Field(default_factory=dict)
    device_compat: dict[str, PlatformSupport] = Field(default_factory=dict)

    # Raw handshake data kept for analysis, never serialised
    certificate_chain: list[bytes] = Field(default_factory=list, exclude=True)
    compression: str | None = Field(default=None, exclude=True)
    alpn: str | None = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _check_supported_fields(self) -> "ProtocolProbeResult":
        if not self.supported:
            if (
                self.cipher is not None
                or self.ephemeral_key is not None
                or self.negotiated_protocol is not None
                or self.certificate_chain
            ):
                raise ValueError("Unsupported probe results cannot carry handshake data")
        return self

    @property
    def leaf_certificate(self) -> bytes | None:
        """DER bytes of the server certificate, if captured."""
        if self.certificate_chain:
            return self.certificate_chain[0]
        return None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def name(self) -> str:
        """Human-readable version name."""
        return self.version.display_name
