"""Cipher and protocol analysis models."""

from pydantic import ConfigDict, Field

from tlsposture.models.base import BaseSchema, ReportSchema, Severity


class CipherFinding(ReportSchema):
    """A scored, categorized issue with its server-side remediation."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    issue: str
    description: str
    remediation: str


class CipherProperties(BaseSchema):
    """Classification of a cipher suite name, computed once per cipher."""

    model_config = ConfigDict(frozen=True)

    name: str
    bits: int | None = None
    has_rc4: bool = False
    has_des: bool = False
    has_3des: bool = False
    has_md5: bool = False
    has_null: bool = False
    has_export: bool = False
    has_anon: bool = False
    has_ecdhe: bool = False
    has_dhe: bool = False
    has_aead: bool = False
    has_cbc: bool = False
    has_chacha: bool = False

    @property
    def forward_secrecy(self) -> bool:
        return self.has_ecdhe or self.has_dhe

    @property
    def key_exchange(self) -> str:
        if self.has_ecdhe:
            return "ECDHE"
        if self.has_dhe:
            return "DHE"
        return "RSA"

    @property
    def banned_components(self) -> list[str]:
        """Insecure components present in the suite name."""
        flags = [
            ("RC4", self.has_rc4),
            ("DES", self.has_des),
            ("MD5", self.has_md5),
            ("NULL", self.has_null),
            ("EXPORT", self.has_export),
            ("anon", self.has_anon),
        ]
        return [component for component, present in flags if present]


class CipherDetails(ReportSchema):
    """Descriptive data about the analyzed cipher."""

    name: str | None = None
    protocol: str | None = None
    bits: int | None = None
    key_exchange: str | None = None
    aead: bool = False
    forward_secrecy: bool = False
    supports_chacha: bool = False
    observed_ciphers: list[str] = Field(default_factory=list)


class CipherAnalysis(ReportSchema):
    """Scored analysis of the negotiated cipher suite."""

    rating: str
    score: int = Field(ge=0, le=100)
    issues: list[CipherFinding] = Field(default_factory=list)
    warnings: list[CipherFinding] = Field(default_factory=list)
    details: CipherDetails = Field(default_factory=CipherDetails)


class ProtocolAnalysis(ReportSchema):
    """Scored analysis of the supported protocol versions."""

    score: int = Field(ge=0, le=100)
    vulnerabilities: list[CipherFinding] = Field(default_factory=list)
    warnings: list[CipherFinding] = Field(default_factory=list)
    supported_versions: list[str] = Field(default_factory=list)
