"""Tests for HSTS and protocol detail collection."""

import httpx
import pytest

from factories import supported_result
from tlsposture.models import TLSVersionId
from tlsposture.probing.details import collect_protocol_details, fetch_hsts, parse_hsts


@pytest.fixture
def mock_http(monkeypatch):
    """Route httpx clients through a handler returning the given response."""

    def install(handler):
        real_client = httpx.AsyncClient

        def client(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", client)

    return install


@pytest.mark.parametrize(
    "header,expected",
    [
        ("max-age=31536000; includeSubDomains; preload", (31536000, True, True)),
        ("max-age=300", (300, False, False)),
        ('max-age="600"; includeSubDomains', (600, True, False)),
        ("includeSubDomains", (None, True, False)),
        ("max-age=abc", (None, False, False)),
    ],
)
def test_parse_hsts(header, expected):
    assert parse_hsts(header) == expected


class TestFetchHsts:
    async def test_enabled(self, mock_http, sample_target):
        mock_http(
            lambda request: httpx.Response(
                200, headers={"Strict-Transport-Security": "max-age=63072000; preload"}
            )
        )

        assert await fetch_hsts(sample_target) == (True, 63072000, False, True)

    async def test_missing_header(self, mock_http, sample_target):
        mock_http(lambda request: httpx.Response(200))
        assert await fetch_hsts(sample_target) == (False, None, False, False)

    async def test_zero_max_age_disables(self, mock_http, sample_target):
        mock_http(lambda request: httpx.Response(200, headers={"strict-transport-security": "max-age=0"}))

        enabled, max_age, _, _ = await fetch_hsts(sample_target)
        assert enabled is False
        assert max_age == 0

    async def test_request_failure_is_not_measured(self, mock_http, sample_target):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        mock_http(handler)
        assert await fetch_hsts(sample_target) == (None, None, False, False)


class TestCollectProtocolDetails:
    async def test_without_hsts_check(self, sample_target, certificate_der):
        primary = supported_result(TLSVersionId.TLS1_3, chain=[certificate_der])
        primary = primary.model_copy(update={"alpn": "h2"})

        details = await collect_protocol_details(sample_target, primary, check_hsts=False)

        assert details.hsts is None
        assert details.compression is False
        assert details.alpn == "h2"
        assert details.ocsp_stapling is None
        assert details.heartbeat is None
        assert details.secure_renegotiation is None

    async def test_with_hsts_check(self, mock_http, sample_target):
        mock_http(
            lambda request: httpx.Response(
                200, headers={"Strict-Transport-Security": "max-age=31536000; includeSubDomains"}
            )
        )

        details = await collect_protocol_details(sample_target, None)

        assert details.hsts is True
        assert details.hsts_max_age == 31536000
        assert details.hsts_include_subdomains
        assert details.compression is None
