"""Certificate evaluation."""

import hashlib
import math
from collections.abc import Sequence
from datetime import datetime, timezone

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.x509.oid import SignatureAlgorithmOID

from tlsposture.core.exceptions import CertificateParseError, MissingCertificateError
from tlsposture.models import CertificateRecord

SECONDS_PER_DAY = 86400

# OpenSSL names for common certificate signature algorithms
SIGNATURE_ALGORITHM_NAMES = {
    SignatureAlgorithmOID.RSA_WITH_MD5: "md5WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA1: "sha1WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA224: "sha224WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA256: "sha256WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA384: "sha384WithRSAEncryption",
    SignatureAlgorithmOID.RSA_WITH_SHA512: "sha512WithRSAEncryption",
    SignatureAlgorithmOID.RSASSA_PSS: "RSASSA-PSS",
    SignatureAlgorithmOID.ECDSA_WITH_SHA1: "ecdsa-with-SHA1",
    SignatureAlgorithmOID.ECDSA_WITH_SHA224: "ecdsa-with-SHA224",
    SignatureAlgorithmOID.ECDSA_WITH_SHA256: "ecdsa-with-SHA256",
    SignatureAlgorithmOID.ECDSA_WITH_SHA384: "ecdsa-with-SHA384",
    SignatureAlgorithmOID.ECDSA_WITH_SHA512: "ecdsa-with-SHA512",
    SignatureAlgorithmOID.DSA_WITH_SHA1: "dsaWithSHA1",
    SignatureAlgorithmOID.DSA_WITH_SHA224: "dsa_with_SHA224",
    SignatureAlgorithmOID.DSA_WITH_SHA256: "dsa_with_SHA256",
    SignatureAlgorithmOID.ED25519: "ed25519",
    SignatureAlgorithmOID.ED448: "ed448",
}


def _name_to_str(name: x509.Name) -> str:
    # RFC4514
    return name.rfc4514_string()


def _subject_alt_names(cert: x509.Certificate) -> list[str]:
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return []

    names: list[str] = []
    for entry in ext.value:
        if isinstance(entry, x509.DNSName):
            names.append(f"DNS:{entry.value}")
        elif isinstance(entry, x509.IPAddress):
            names.append(f"IP Address:{entry.value}")
        elif isinstance(entry, x509.RFC822Name):
            names.append(f"email:{entry.value}")
        elif isinstance(entry, x509.UniformResourceIdentifier):
            names.append(f"URI:{entry.value}")
    return names


def _key_info(cert: x509.Certificate) -> tuple[str | None, int | None]:
    key = cert.public_key()
    if isinstance(key, rsa.RSAPublicKey):
        return "RSA", key.key_size
    if isinstance(key, ec.EllipticCurvePublicKey):
        return f"EC ({key.curve.name})", key.key_size
    if isinstance(key, dsa.DSAPublicKey):
        return "DSA", key.key_size
    if isinstance(key, ed25519.Ed25519PublicKey):
        return "Ed25519", 256
    if isinstance(key, ed448.Ed448PublicKey):
        return "Ed448", 456
    return None, None


def _signature_algorithm(cert: x509.Certificate) -> str | None:
    oid = cert.signature_algorithm_oid
    return SIGNATURE_ALGORITHM_NAMES.get(oid, oid.dotted_string)


def days_between(now: datetime, later: datetime) -> int:
    """Whole days from ``now`` to ``later``, floored (negative once passed)."""
    return math.floor((later - now).total_seconds() / SECONDS_PER_DAY)


def load_certificate(der: bytes) -> x509.Certificate:
    """Decode a DER certificate."""
    try:
        return x509.load_der_x509_certificate(der)
    except ValueError as e:
        raise CertificateParseError(f"Cannot decode peer certificate: {e}") from e


def evaluate_certificate(
    certificate: bytes | Sequence[bytes] | None,
    now: datetime | None = None,
) -> CertificateRecord:
    """
    Build a CertificateRecord from the peer's DER certificate or chain.

    Pure apart from ``days_remaining``, which is measured against ``now``
    (the evaluation time when omitted); every other field is identical
    across calls on the same certificate.
    """
    if certificate is None or len(certificate) == 0:
        raise MissingCertificateError("No certificate was obtained from the target")

    if isinstance(certificate, (bytes, bytearray)):
        chain = [bytes(certificate)]
    else:
        chain = [bytes(der) for der in certificate]

    cert = load_certificate(chain[0])
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    not_before = cert.not_valid_before_utc
    not_after = cert.not_valid_after_utc

    subject = _name_to_str(cert.subject)
    issuer = _name_to_str(cert.issuer)
    key_algorithm, key_size = _key_info(cert)

    return CertificateRecord(
        subject=subject,
        issuer=issuer,
        not_before=not_before,
        not_after=not_after,
        serial_number=format(cert.serial_number, "X"),
        fingerprint_sha1=hashlib.sha1(chain[0]).hexdigest().upper(),
        fingerprint_sha256=hashlib.sha256(chain[0]).hexdigest().upper(),
        subject_alt_names=_subject_alt_names(cert),
        key_algorithm=key_algorithm,
        key_size=key_size,
        signature_algorithm=_signature_algorithm(cert),
        days_remaining=days_between(now, not_after),
        validity_days=days_between(not_before, not_after),
        is_self_signed=cert.subject == cert.issuer,
        chain_length=len(chain),
    )
