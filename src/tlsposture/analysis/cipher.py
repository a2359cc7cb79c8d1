"""Cipher suite classification and scoring."""

import re

from tlsposture.models import (
    CipherAnalysis,
    CipherDetails,
    CipherFinding,
    CipherProperties,
    NegotiatedCipher,
    Severity,
)

# Block ciphers that run in CBC mode unless an AEAD mode is named
BLOCK_CIPHERS = ("AES", "CAMELLIA", "ARIA", "SEED", "IDEA", "DES")

CIPHER_RATINGS = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]

BANNED_REMEDIATION = {
    "RC4": "Remove RC4 suites from the server cipher list (ssl_ciphers / SSLCipherSuite '!RC4')",
    "DES": "Remove single-DES suites from the server cipher list ('!DES')",
    "MD5": "Remove suites using MD5 message authentication ('!MD5')",
    "NULL": "Remove NULL-encryption suites from the server cipher list ('!eNULL')",
    "EXPORT": "Remove export-grade suites from the server cipher list ('!EXPORT')",
    "anon": "Remove anonymous key exchange suites from the server cipher list ('!aNULL')",
}


def _tokens(name: str) -> list[str]:
    return [token for token in re.split(r"[-_]", name) if token]


def classify_cipher(name: str, bits: int | None = None) -> CipherProperties:
    """
    Classify a cipher suite name once into explicit properties.

    Accepts both OpenSSL names (``ECDHE-RSA-AES128-GCM-SHA256``) and IANA
    names (``TLS_ECDHE_RSA_WITH_AES_128_GCM_SHA256``). TLS 1.3 suites
    (``TLS_AES_128_GCM_SHA256``) always use an ephemeral (EC)DHE exchange.
    """
    tokens = _tokens(name)
    upper = name.upper()

    has_3des = "3DES" in tokens or "CBC3" in tokens or "EDE" in tokens
    has_des = "DES" in tokens and not has_3des
    has_aead = any(mode in upper for mode in ("GCM", "CCM", "POLY1305"))
    is_tls13 = upper.startswith("TLS_") and "_WITH_" not in upper

    has_ecdhe = "ECDHE" in upper or is_tls13
    has_dhe = "DHE" in tokens or "EDH" in tokens

    has_cbc = "CBC" in tokens or (
        not has_aead and any(block in upper for block in BLOCK_CIPHERS)
    )

    return CipherProperties(
        name=name,
        bits=bits,
        has_rc4="RC4" in upper,
        has_des=has_des,
        has_3des=has_3des,
        has_md5="MD5" in upper,
        has_null="NULL" in upper,
        has_export="EXPORT" in upper or "EXP" in tokens,
        has_anon="anon" in name or "ADH" in tokens or "AECDH" in tokens,
        has_ecdhe=has_ecdhe,
        has_dhe=has_dhe,
        has_aead=has_aead,
        has_cbc=has_cbc,
        has_chacha="CHACHA" in upper,
    )


def cipher_rating(score: int) -> str:
    """Letter rating for a cipher score."""
    for threshold, rating in CIPHER_RATINGS:
        if score >= threshold:
            return rating
    return "F"


def analyze_cipher(
    cipher: NegotiatedCipher | None,
    all_observed_ciphers: list[str] | None = None,
) -> CipherAnalysis:
    """Score the negotiated cipher suite."""
    observed = list(dict.fromkeys(all_observed_ciphers or []))
    supports_chacha = any("CHACHA" in name.upper() for name in observed)

    if cipher is None:
        return CipherAnalysis(
            rating="F",
            score=0,
            issues=[
                CipherFinding(
                    severity=Severity.CRITICAL,
                    issue="no cipher information",
                    description="The handshake did not report a negotiated cipher suite",
                    remediation="Verify the server completes TLS handshakes with a modern cipher suite",
                )
            ],
            details=CipherDetails(supports_chacha=supports_chacha, observed_ciphers=observed),
        )

    props = classify_cipher(cipher.name, cipher.bits)
    issues: list[CipherFinding] = []
    warnings: list[CipherFinding] = []
    score = 100
    critical = False

    banned = props.banned_components
    if banned:
        critical = True
        for component in banned:
            issues.append(
                CipherFinding(
                    severity=Severity.CRITICAL,
                    issue=f"insecure cipher component: {component}",
                    description=f"{cipher.name} uses {component}, which offers no meaningful protection",
                    remediation=BANNED_REMEDIATION[component],
                )
            )
    elif props.has_3des:
        score -= 40
        issues.append(
            CipherFinding(
                severity=Severity.HIGH,
                issue="3DES deprecated (Sweet32)",
                description="64-bit block ciphers are vulnerable to birthday attacks (CVE-2016-2183)",
                remediation="Remove 3DES suites from the server cipher list ('!3DES')",
            )
        )

    bits = props.bits
    if bits is not None:
        if bits < 112:
            critical = True
            issues.append(
                CipherFinding(
                    severity=Severity.CRITICAL,
                    issue=f"low key strength: {bits} bits",
                    description="Effective key strength below 112 bits can be brute-forced",
                    remediation="Offer only suites with at least 128-bit encryption",
                )
            )
        elif bits < 128:
            score -= 30
            issues.append(
                CipherFinding(
                    severity=Severity.HIGH,
                    issue=f"weak key strength: {bits} bits",
                    description="Effective key strength below 128 bits",
                    remediation="Offer only suites with at least 128-bit encryption",
                )
            )
        elif bits < 256:
            score -= 5
            warnings.append(
                CipherFinding(
                    severity=Severity.LOW,
                    issue=f"{bits}-bit encryption (256-bit recommended)",
                    description="The negotiated suite uses less than 256-bit encryption",
                    remediation="Prefer AES-256-GCM or CHACHA20-POLY1305 suites in the server order",
                )
            )

    if not props.forward_secrecy:
        score -= 30
        issues.append(
            CipherFinding(
                severity=Severity.HIGH,
                issue="no forward secrecy",
                description="Static RSA key exchange lets a compromised server key decrypt recorded sessions",
                remediation="Prefer ECDHE (or DHE) key exchange suites",
            )
        )

    if props.has_cbc and not props.has_aead:
        score -= 10
        warnings.append(
            CipherFinding(
                severity=Severity.LOW,
                issue="CBC mode (AEAD recommended)",
                description="CBC suites have a history of padding-oracle attacks (Lucky13, POODLE)",
                remediation="Prefer GCM, CCM or POLY1305 suites",
            )
        )

    score = 0 if critical else max(0, min(100, score))

    return CipherAnalysis(
        rating=cipher_rating(score),
        score=score,
        issues=issues,
        warnings=warnings,
        details=CipherDetails(
            name=cipher.name,
            protocol=cipher.protocol,
            bits=cipher.bits,
            key_exchange=props.key_exchange,
            aead=props.has_aead,
            forward_secrecy=props.forward_secrecy,
            supports_chacha=supports_chacha,
            observed_ciphers=observed,
        ),
    )
