"""Test data builders for certificates and probe results."""

from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import NameOID

from tlsposture.models import (
    CertificateRecord,
    EphemeralKey,
    NegotiatedCipher,
    ProtocolProbeResult,
    TLSVersionId,
)

_KEYS: dict[tuple[str, int], object] = {}


def _private_key(kind: str, size: int):
    key = _KEYS.get((kind, size))
    if key is None:
        if kind == "ec":
            key = ec.generate_private_key(ec.SECP256R1())
        elif kind == "ed25519":
            key = ed25519.Ed25519PrivateKey.generate()
        else:
            key = rsa.generate_private_key(public_exponent=65537, key_size=size)
        _KEYS[(kind, size)] = key
    return key


def _build_certificate(
    days_remaining: float = 200,
    validity_days: int = 365,
    key_size: int = 2048,
    key_kind: str = "rsa",
    common_name: str = "example.com",
    issuer_name: str | None = "Test CA",
    san: list[str] | None = None,
):
    key = _private_key(key_kind, key_size)
    now = datetime.now(timezone.utc)
    not_after = now + timedelta(days=days_remaining)
    not_before = not_after - timedelta(days=validity_days)

    subject = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    issuer = (
        x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, issuer_name)])
        if issuer_name
        else subject
    )
    names = san if san is not None else [common_name, f"www.{common_name}"]

    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(key.public_key())
        .serial_number(0x1A2B3C)
        .not_valid_before(not_before)
        .not_valid_after(not_after)
        .add_extension(
            x509.SubjectAlternativeName([x509.DNSName(name) for name in names]),
            critical=False,
        )
        # EdDSA signs without a separate digest
        .sign(key, None if key_kind == "ed25519" else hashes.SHA256())
    )
    return cert, key


def make_certificate(**kwargs) -> bytes:
    """Build a DER certificate expiring ``days_remaining`` days from now."""
    cert, _ = _build_certificate(**kwargs)
    return cert.public_bytes(serialization.Encoding.DER)


def write_server_credentials(directory, common_name: str = "localhost") -> tuple[str, str, bytes]:
    """Write PEM certificate and key files for a test server.

    Returns the certificate path, the key path and the certificate DER.
    """
    cert, key = _build_certificate(common_name=common_name, san=[common_name])
    certfile = directory / "server.crt"
    keyfile = directory / "server.key"
    certfile.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    keyfile.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return str(certfile), str(keyfile), cert.public_bytes(serialization.Encoding.DER)


def supported_result(
    version: TLSVersionId,
    cipher: str = "ECDHE-RSA-AES256-GCM-SHA384",
    bits: int = 256,
    chain: list[bytes] | None = None,
) -> ProtocolProbeResult:
    """A successful probe result."""
    return ProtocolProbeResult(
        version=version,
        supported=True,
        cipher=NegotiatedCipher(
            name=cipher,
            protocol=version.value,
            bits=bits,
            aead="GCM" in cipher or "POLY1305" in cipher,
            forward_secrecy="DHE" in cipher or cipher.startswith("TLS_"),
        ),
        ephemeral_key=EphemeralKey(algorithm="ECDHE"),
        negotiated_protocol=version.value,
        latency_ms=12.5,
        certificate_chain=chain or [],
    )


def unsupported_result(
    version: TLSVersionId, error: str = "protocol not offered"
) -> ProtocolProbeResult:
    """A rejected probe result."""
    return ProtocolProbeResult(version=version, supported=False, error=error)


def make_record(
    days_remaining: int = 200,
    key_size: int = 2048,
    key_algorithm: str = "RSA",
) -> CertificateRecord:
    """A CertificateRecord built directly, without DER encoding."""
    not_after = datetime.now(timezone.utc) + timedelta(days=days_remaining)
    return CertificateRecord(
        subject="CN=example.com",
        issuer="CN=Test CA",
        not_before=not_after - timedelta(days=365),
        not_after=not_after,
        serial_number="01",
        fingerprint_sha1="AA" * 20,
        fingerprint_sha256="BB" * 32,
        key_algorithm=key_algorithm,
        key_size=key_size,
        days_remaining=days_remaining,
        validity_days=365,
    )
