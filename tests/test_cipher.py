"""Tests for cipher classification and scoring."""

import pytest

from tlsposture.analysis.cipher import analyze_cipher, cipher_rating, classify_cipher
from tlsposture.models import NegotiatedCipher, Severity


def _cipher(name: str, bits: int | None) -> NegotiatedCipher:
    return NegotiatedCipher(name=name, bits=bits)


def _issue_names(analysis) -> list[str]:
    return [finding.issue for finding in analysis.issues]


class TestClassifyCipher:
    def test_openssl_ecdhe_gcm(self):
        props = classify_cipher("ECDHE-RSA-AES128-GCM-SHA256", 128)
        assert props.has_ecdhe
        assert props.has_aead
        assert not props.has_cbc
        assert props.key_exchange == "ECDHE"

    def test_static_rsa_cbc(self):
        props = classify_cipher("AES256-SHA", 256)
        assert not props.forward_secrecy
        assert props.has_cbc
        assert props.key_exchange == "RSA"

    def test_triple_des_is_not_single_des(self):
        props = classify_cipher("DES-CBC3-SHA", 112)
        assert props.has_3des
        assert not props.has_des
        assert props.banned_components == []

    def test_iana_triple_des(self):
        props = classify_cipher("TLS_RSA_WITH_3DES_EDE_CBC_SHA", 112)
        assert props.has_3des
        assert not props.has_des

    def test_single_des(self):
        props = classify_cipher("DES-CBC-SHA", 56)
        assert props.has_des
        assert "DES" in props.banned_components

    def test_tls13_suite_uses_ephemeral_exchange(self):
        props = classify_cipher("TLS_AES_256_GCM_SHA384", 256)
        assert props.forward_secrecy
        assert props.has_aead

    def test_dhe(self):
        props = classify_cipher("DHE-RSA-AES256-GCM-SHA384", 256)
        assert props.has_dhe
        assert not props.has_ecdhe
        assert props.key_exchange == "DHE"

    def test_chacha(self):
        props = classify_cipher("ECDHE-RSA-CHACHA20-POLY1305", 256)
        assert props.has_chacha
        assert props.has_aead

    def test_anonymous_and_export(self):
        assert classify_cipher("TLS_DH_anon_WITH_AES_128_CBC_SHA").has_anon
        assert classify_cipher("ADH-AES128-SHA").has_anon
        assert classify_cipher("EXP-RC4-MD5").has_export


class TestAnalyzeCipher:
    def test_ecdhe_aes128_gcm(self):
        analysis = analyze_cipher(_cipher("ECDHE-RSA-AES128-GCM-SHA256", 128))

        assert analysis.score == 95
        # Cipher ratings start A+ at 90
        assert analysis.rating == "A+"
        assert analysis.issues == []
        assert len(analysis.warnings) == 1
        assert analysis.details.aead
        assert analysis.details.forward_secrecy

    def test_strong_cipher_is_perfect(self):
        analysis = analyze_cipher(_cipher("ECDHE-RSA-AES256-GCM-SHA384", 256))
        assert analysis.score == 100
        assert analysis.rating == "A+"

    @pytest.mark.parametrize("bits", [40, 128, 256])
    def test_rc4_is_always_zero(self, bits):
        analysis = analyze_cipher(_cipher("ECDHE-RSA-RC4-SHA", bits))

        assert analysis.score == 0
        assert analysis.rating == "F"
        assert "insecure cipher component: RC4" in _issue_names(analysis)
        assert analysis.issues[0].severity == Severity.CRITICAL

    def test_no_forward_secrecy(self):
        analysis = analyze_cipher(_cipher("AES256-SHA", 256))

        assert "no forward secrecy" in _issue_names(analysis)
        # 30 for forward secrecy, 10 for CBC
        assert analysis.score == 60
        assert analysis.rating == "C"
        assert [w.issue for w in analysis.warnings] == ["CBC mode (AEAD recommended)"]

    def test_triple_des_deduction(self):
        analysis = analyze_cipher(_cipher("ECDHE-RSA-DES-CBC3-SHA", 168))

        assert "3DES deprecated (Sweet32)" in _issue_names(analysis)
        # 3DES 40, 128-255 bits 5, CBC 10
        assert analysis.score == 45
        assert analysis.rating == "F"

    def test_low_key_strength_is_critical(self):
        analysis = analyze_cipher(_cipher("ECDHE-RSA-AES128-GCM-SHA256", 64))
        assert analysis.score == 0
        assert analysis.issues[0].severity == Severity.CRITICAL

    def test_weak_key_strength(self):
        analysis = analyze_cipher(_cipher("ECDHE-RSA-AES128-GCM-SHA256", 112))
        assert analysis.score == 70
        assert analysis.rating == "B"

    def test_score_is_clamped(self):
        analysis = analyze_cipher(_cipher("DES-CBC3-SHA", 112))
        # 3DES 40, weak bits 30, no FS 30, CBC 10
        assert analysis.score == 0
        assert 0 <= analysis.score <= 100

    def test_missing_cipher(self):
        analysis = analyze_cipher(None)
        assert analysis.rating == "F"
        assert analysis.score == 0
        assert _issue_names(analysis) == ["no cipher information"]

    def test_chacha_support_comes_from_observed_ciphers(self):
        cipher = _cipher("ECDHE-RSA-AES256-GCM-SHA384", 256)

        assert not analyze_cipher(cipher, [cipher.name]).details.supports_chacha
        analysis = analyze_cipher(cipher, [cipher.name, "ECDHE-RSA-CHACHA20-POLY1305"])
        assert analysis.details.supports_chacha

    def test_observed_ciphers_are_deduplicated(self):
        cipher = _cipher("ECDHE-RSA-AES256-GCM-SHA384", 256)
        analysis = analyze_cipher(cipher, [cipher.name, cipher.name, "AES128-SHA"])
        assert analysis.details.observed_ciphers == [cipher.name, "AES128-SHA"]


@pytest.mark.parametrize(
    "score,rating",
    [(100, "A+"), (90, "A+"), (89, "A"), (80, "A"), (70, "B"), (60, "C"), (50, "D"), (49, "F"), (0, "F")],
)
def test_cipher_rating_thresholds(score, rating):
    assert cipher_rating(score) == rating
