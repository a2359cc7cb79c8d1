"""Composite posture grading."""

import math
from collections.abc import Iterable

from tlsposture.core.exceptions import GradingError
from tlsposture.models import CertificateRecord, CipherFinding, PostureGrade, Severity

# Protocol and cipher gaps are weighted; certificate issues deduct flat points.
PROTOCOL_WEIGHT = 0.4
CIPHER_WEIGHT = 0.3
MIN_KEY_SIZE = 2048
# Elliptic-curve size comparable to a 2048-bit RSA key (NIST SP 800-57)
MIN_EC_KEY_SIZE = 224

GRADE_THRESHOLDS = [
    (95, "A+"),
    (80, "A"),
    (65, "B"),
    (50, "C"),
    (35, "D"),
    (20, "E"),
]

SECURITY_LEVELS = {
    "A+": "Excellent",
    "A": "Excellent",
    "B": "Good",
    "C": "Fair",
}


def letter_grade(score: int) -> str:
    """Letter grade for a composite score."""
    for threshold, grade_letter in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade_letter
    return "F"


def security_level(grade_letter: str) -> str:
    """Coarse label derived only from the letter grade."""
    return SECURITY_LEVELS.get(grade_letter, "Poor")


def _is_weak_key(certificate: CertificateRecord) -> bool:
    algorithm = certificate.key_algorithm or ""
    if algorithm.startswith(("EC", "Ed")):
        return certificate.key_size < MIN_EC_KEY_SIZE
    return certificate.key_size < MIN_KEY_SIZE


def _check_score(name: str, value: int | float) -> None:
    if value is None or not isinstance(value, (int, float)) or isinstance(value, bool):
        raise GradingError(f"{name} is required and must be numeric, got {value!r}")
    if not 0 <= value <= 100:
        raise GradingError(f"{name} must be within [0, 100], got {value}")


def grade(
    certificate: CertificateRecord,
    protocol_score: int,
    cipher_score: int,
    findings: Iterable[CipherFinding] = (),
) -> PostureGrade:
    """
    Combine certificate, protocol and cipher results into one grade.

    Deductions are applied in sequence to the running score. Certificate
    problems subtract flat points; protocol and cipher scores contribute
    40% and 30% of their distance from 100. ``findings`` from the protocol
    and cipher analyses are appended after the certificate findings.
    """
    if certificate is None:
        raise GradingError("A certificate record is required for grading")
    if certificate.days_remaining is None:
        raise GradingError("Certificate record is missing days_remaining")
    if certificate.key_size is None:
        raise GradingError("Certificate record is missing key_size")
    _check_score("protocol_score", protocol_score)
    _check_score("cipher_score", cipher_score)

    score: float = 100
    certificate_findings: list[CipherFinding] = []
    days = certificate.days_remaining

    if days < 0:
        score = 0
        certificate_findings.append(
            CipherFinding(
                severity=Severity.CRITICAL,
                issue="CRITICAL: Certificate expired",
                description=f"Certificate expired {-days} days ago ({certificate.not_after.date()})",
                remediation="Renew the certificate immediately",
            )
        )
    elif days < 7:
        score -= 30
        certificate_findings.append(
            CipherFinding(
                severity=Severity.HIGH,
                issue="certificate expires in < 7 days",
                description=f"Certificate expires in {days} days",
                remediation="Renew the certificate now and automate renewal (e.g. ACME)",
            )
        )
    elif days < 30:
        score -= 15
        certificate_findings.append(
            CipherFinding(
                severity=Severity.MEDIUM,
                issue="certificate expires soon",
                description=f"Certificate expires in {days} days",
                remediation="Renew the certificate before expiration",
            )
        )

    if _is_weak_key(certificate) and score > 0:
        score -= 20
        certificate_findings.append(
            CipherFinding(
                severity=Severity.HIGH,
                issue="weak key size",
                description=f"{certificate.key_algorithm or 'Public'} key is {certificate.key_size} bits",
                remediation=f"Reissue the certificate with a key of at least {MIN_KEY_SIZE} bits (or ECDSA P-256)",
            )
        )

    score -= (100 - protocol_score) * PROTOCOL_WEIGHT
    score -= (100 - cipher_score) * CIPHER_WEIGHT

    final_score = max(0, min(100, math.floor(score + 0.5)))
    grade_letter = letter_grade(final_score)

    return PostureGrade(
        grade=grade_letter,
        score=final_score,
        findings=[*certificate_findings, *findings],
        security_level=security_level(grade_letter),
    )
