"""Tests for protocol version scoring."""

from factories import supported_result, unsupported_result
from tlsposture.analysis.protocol import analyze_protocols
from tlsposture.models import Severity, TLSVersionId


def _matrix(*supported: TLSVersionId) -> dict:
    return {
        version: supported_result(version) if version in supported else unsupported_result(version)
        for version in TLSVersionId
    }


def test_modern_only_has_no_deductions():
    analysis = analyze_protocols(_matrix(TLSVersionId.TLS1_2, TLSVersionId.TLS1_3))

    assert analysis.score == 100
    assert analysis.vulnerabilities == []
    assert analysis.warnings == []
    assert analysis.supported_versions == ["TLSv1.2", "TLSv1.3"]


def test_unsupported_legacy_versions_are_not_reported():
    analysis = analyze_protocols(_matrix(TLSVersionId.TLS1_2, TLSVersionId.TLS1_3))
    issues = [v.issue for v in analysis.vulnerabilities]

    assert "TLS 1.0 enabled" not in issues
    assert "TLS 1.1 enabled" not in issues


def test_only_tls10_supported():
    analysis = analyze_protocols(_matrix(TLSVersionId.TLS1_0))

    # 100 - 40 - 50 - 10
    assert analysis.score == 0
    assert [v.issue for v in analysis.vulnerabilities] == [
        "TLS 1.0 enabled",
        "TLS 1.2 not supported",
    ]
    assert [w.issue for w in analysis.warnings] == ["TLS 1.3 not supported"]


def test_missing_tls13_is_a_warning_only():
    analysis = analyze_protocols(_matrix(TLSVersionId.TLS1_2))

    assert analysis.score == 90
    assert analysis.vulnerabilities == []
    assert analysis.warnings[0].severity == Severity.MEDIUM


def test_legacy_versions_stack():
    analysis = analyze_protocols(
        _matrix(TLSVersionId.TLS1_0, TLSVersionId.TLS1_1, TLSVersionId.TLS1_2)
    )

    # 100 - 40 - 30 - 10
    assert analysis.score == 20
    assert all(v.severity == Severity.HIGH for v in analysis.vulnerabilities)


def test_score_is_clamped_at_zero():
    analysis = analyze_protocols(_matrix(TLSVersionId.TLS1_0, TLSVersionId.TLS1_1))
    # 100 - 40 - 30 - 50 - 10 would be negative
    assert analysis.score == 0
    assert len(analysis.vulnerabilities) == 3


def test_missing_versions_count_as_unsupported():
    analysis = analyze_protocols({TLSVersionId.TLS1_2: supported_result(TLSVersionId.TLS1_2)})
    assert analysis.score == 90


def test_string_keys_are_accepted():
    results = {v.value: r for v, r in _matrix(TLSVersionId.TLS1_2, TLSVersionId.TLS1_3).items()}
    assert analyze_protocols(results).score == 100
