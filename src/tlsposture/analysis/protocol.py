"""Protocol version support scoring."""

from collections.abc import Mapping

from tlsposture.models import (
    CipherFinding,
    ProtocolAnalysis,
    ProtocolProbeResult,
    Severity,
    TLSVersionId,
    TLS_VERSIONS,
)


def _supported(
    results: Mapping[TLSVersionId | str, ProtocolProbeResult],
    version: TLSVersionId,
) -> bool:
    result = results.get(version)
    if result is None:
        result = results.get(version.value)
    return bool(result and result.supported)


def analyze_protocols(
    results: Mapping[TLSVersionId | str, ProtocolProbeResult],
) -> ProtocolAnalysis:
    """
    Score the set of supported protocol versions.

    A version missing from ``results`` counts as not supported.
    """
    score = 100
    vulnerabilities: list[CipherFinding] = []
    warnings: list[CipherFinding] = []

    if _supported(results, TLSVersionId.TLS1_0):
        score -= 40
        vulnerabilities.append(
            CipherFinding(
                severity=Severity.HIGH,
                issue="TLS 1.0 enabled",
                description=(
                    "TLS 1.0 is deprecated (RFC 8996) and exposed to BEAST "
                    "(CVE-2011-3389) and POODLE-style downgrade attacks (CVE-2014-3566)"
                ),
                remediation="Disable TLS 1.0 (e.g. ssl_protocols TLSv1.2 TLSv1.3)",
            )
        )

    if _supported(results, TLSVersionId.TLS1_1):
        score -= 30
        vulnerabilities.append(
            CipherFinding(
                severity=Severity.HIGH,
                issue="TLS 1.1 enabled",
                description="TLS 1.1 is deprecated (RFC 8996) and rejected by current browsers",
                remediation="Disable TLS 1.1 (e.g. ssl_protocols TLSv1.2 TLSv1.3)",
            )
        )

    if not _supported(results, TLSVersionId.TLS1_2):
        score -= 50
        vulnerabilities.append(
            CipherFinding(
                severity=Severity.CRITICAL,
                issue="TLS 1.2 not supported",
                description="Most clients require TLS 1.2 as their minimum version",
                remediation="Enable TLS 1.2 with AEAD cipher suites",
            )
        )

    if not _supported(results, TLSVersionId.TLS1_3):
        score -= 10
        warnings.append(
            CipherFinding(
                severity=Severity.MEDIUM,
                issue="TLS 1.3 not supported",
                description="TLS 1.3 provides better security and a faster handshake",
                remediation="Enable TLS 1.3 (OpenSSL 1.1.1 or later)",
            )
        )

    return ProtocolAnalysis(
        score=max(0, min(100, score)),
        vulnerabilities=vulnerabilities,
        warnings=warnings,
        supported_versions=[
            version.value for version in TLS_VERSIONS if _supported(results, version)
        ],
    )
