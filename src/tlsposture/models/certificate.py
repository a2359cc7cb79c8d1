"""Certificate record model."""

from datetime import datetime

from pydantic import Field

from tlsposture.models.base import ReportSchema


class CertificateRecord(ReportSchema):
    """Decoded server certificate.

    ``days_remaining`` is computed against the evaluation time and is the
    only field that changes between two evaluations of the same certificate.
    """

    subject: str
    issuer: str
    not_before: datetime
    not_after: datetime
    serial_number: str

    # Fingerprints
    fingerprint_sha1: str
    fingerprint_sha256: str

    # Subject Alternative Names, in certificate order
    subject_alt_names: list[str] = Field(default_factory=list)

    # Key information
    key_algorithm: str | None = None
    key_size: int | None = None
    signature_algorithm: str | None = None

    # Validity
    days_remaining: int
    validity_days: int

    # Chain info
    is_self_signed: bool = False
    chain_length: int = 1

    @property
    def is_expired(self) -> bool:
        return self.days_remaining < 0
