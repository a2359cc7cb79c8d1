"""Pytest configuration and fixtures."""

import pytest

from factories import make_certificate, supported_result, unsupported_result
from tlsposture.core.config import Settings
from tlsposture.models import ProtocolDetails, ProtocolProbeResult, TargetHost, TLSVersionId
from tlsposture.scanners.tls import scanner as scanner_module


@pytest.fixture
def certificate_der() -> bytes:
    """A valid 2048-bit RSA certificate with 200 days remaining."""
    return make_certificate()


@pytest.fixture
def sample_target() -> TargetHost:
    """Sample evaluation target for testing."""
    return TargetHost(hostname="example.com")


@pytest.fixture
def test_settings() -> Settings:
    """Settings with short timeouts and optional collectors disabled."""
    return Settings(
        probe_timeout=2,
        cipher_enumeration_enabled=False,
        hsts_check_enabled=False,
    )


@pytest.fixture
def modern_results(certificate_der: bytes) -> dict[TLSVersionId, ProtocolProbeResult]:
    """TLS 1.2 and 1.3 supported; 1.0 and 1.1 rejected."""
    return {
        TLSVersionId.TLS1_0: unsupported_result(TLSVersionId.TLS1_0),
        TLSVersionId.TLS1_1: unsupported_result(TLSVersionId.TLS1_1),
        TLSVersionId.TLS1_2: supported_result(TLSVersionId.TLS1_2, chain=[certificate_der]),
        TLSVersionId.TLS1_3: supported_result(
            TLSVersionId.TLS1_3,
            cipher="TLS_AES_256_GCM_SHA384",
            chain=[certificate_der],
        ),
    }


@pytest.fixture
def stub_network(monkeypatch):
    """Replace resolution, probing and detail collection with canned results."""

    def install(results, suites=None, details=None):
        calls = {"enumerate": 0, "address": None, "details": None}

        async def resolve_host(hostname, timeout=5.0):
            return ["93.184.216.34"]

        async def probe_all(host, port=443, versions=None, timeout=8.0, address=None):
            calls["address"] = address
            return results

        async def enumerate_ciphers(
            host, port, results, timeout=8.0, concurrency=4, sample=None, address=None
        ):
            calls["enumerate"] += 1
            return suites or {}

        async def collect_protocol_details(target, primary, check_hsts=True, timeout=10.0):
            calls["details"] = (check_hsts, timeout)
            return details or ProtocolDetails(compression=False)

        monkeypatch.setattr(scanner_module, "resolve_host", resolve_host)
        monkeypatch.setattr(scanner_module, "probe_all", probe_all)
        monkeypatch.setattr(scanner_module, "enumerate_ciphers", enumerate_ciphers)
        monkeypatch.setattr(scanner_module, "collect_protocol_details", collect_protocol_details)
        return calls

    return install
