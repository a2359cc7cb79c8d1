"""Prioritized remediation list."""

from tlsposture.models import (
    CipherAnalysis,
    CipherFinding,
    PostureGrade,
    ProtocolAnalysis,
    ProtocolDetails,
    Recommendation,
    Severity,
)


def _from_finding(finding: CipherFinding, category: str) -> Recommendation:
    return Recommendation(
        severity=finding.severity,
        category=category,
        issue=finding.issue,
        description=finding.description,
        remediation=finding.remediation,
    )


def build_recommendations(
    grading: PostureGrade,
    protocol_analysis: ProtocolAnalysis,
    cipher_analysis: CipherAnalysis,
    details: ProtocolDetails | None = None,
) -> list[Recommendation]:
    """
    Flatten all findings into one list, most severe first.

    Order within a severity tier follows certificate, protocol, cipher,
    configuration. Repeated issues are reported once.
    """
    protocol_findings = {
        finding.issue
        for finding in [*protocol_analysis.vulnerabilities, *protocol_analysis.warnings]
    }
    cipher_findings = {
        finding.issue for finding in [*cipher_analysis.issues, *cipher_analysis.warnings]
    }

    items: list[Recommendation] = []
    for finding in grading.findings:
        if finding.issue in protocol_findings or finding.issue in cipher_findings:
            continue
        items.append(_from_finding(finding, "certificate"))

    for finding in [*protocol_analysis.vulnerabilities, *protocol_analysis.warnings]:
        items.append(_from_finding(finding, "protocol"))

    for finding in [*cipher_analysis.issues, *cipher_analysis.warnings]:
        items.append(_from_finding(finding, "cipher"))

    if details is not None:
        if details.hsts is False:
            items.append(
                Recommendation(
                    severity=Severity.MEDIUM,
                    category="configuration",
                    issue="HSTS not enabled",
                    description="The server does not send a Strict-Transport-Security header",
                    remediation="Add 'Strict-Transport-Security: max-age=31536000; includeSubDomains'",
                )
            )
        if details.compression:
            items.append(
                Recommendation(
                    severity=Severity.HIGH,
                    category="configuration",
                    issue="TLS compression enabled",
                    description="TLS-level compression exposes sessions to CRIME (CVE-2012-4929)",
                    remediation="Disable TLS compression on the server",
                )
            )

    seen: set[str] = set()
    unique: list[Recommendation] = []
    for item in items:
        if item.issue in seen:
            continue
        seen.add(item.issue)
        unique.append(item)

    return sorted(unique, key=lambda item: item.severity.rank)
