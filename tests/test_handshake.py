"""Tests for client handshake simulation."""

from factories import supported_result, unsupported_result
from tlsposture.analysis.handshake import DEFAULT_CLIENT_CATALOG, HandshakeSimulator
from tlsposture.models import ClientProfile, TLSVersionId


def test_default_catalog_covers_every_profile(modern_results):
    simulations = HandshakeSimulator().simulate(modern_results)

    assert len(simulations) == len(DEFAULT_CLIENT_CATALOG)
    assert [s.client for s in simulations] == [p.name for p in DEFAULT_CLIENT_CATALOG]


def test_success_follows_protocol_support(modern_results):
    simulations = HandshakeSimulator().simulate(modern_results)

    for simulation in simulations:
        expected = modern_results[simulation.protocol].supported
        assert simulation.success is expected


def test_injected_catalog():
    catalog = [
        ClientProfile(name="Modern", protocol=TLSVersionId.TLS1_3),
        ClientProfile(name="Legacy", protocol=TLSVersionId.TLS1_0),
    ]
    results = {
        TLSVersionId.TLS1_0: unsupported_result(TLSVersionId.TLS1_0),
        TLSVersionId.TLS1_3: supported_result(
            TLSVersionId.TLS1_3, cipher="TLS_AES_128_GCM_SHA256", bits=128
        ),
    }

    modern, legacy = HandshakeSimulator(catalog).simulate(results)

    assert modern.success
    assert modern.cipher == "TLS_AES_128_GCM_SHA256"
    assert modern.key_exchange == "ECDHE"
    assert modern.reason is None

    assert not legacy.success
    assert legacy.cipher is None
    assert legacy.reason == "protocol not supported"


def test_missing_version_fails():
    catalog = [ClientProfile(name="Only 1.2", protocol=TLSVersionId.TLS1_2)]
    (result,) = HandshakeSimulator(catalog).simulate({})

    assert not result.success
    assert result.reason == "protocol not supported"


def test_empty_catalog(modern_results):
    assert HandshakeSimulator([]).simulate(modern_results) == []
