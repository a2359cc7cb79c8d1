"""Cipher suite enumeration for pre-1.3 protocol versions."""

import asyncio

from tlsposture.core.logging import get_logger
from tlsposture.models import ProtocolProbeResult, TLSVersionId
from tlsposture.probing.connection import handshake

logger = get_logger("cipher_enumeration")

# Representative suites, strongest first (OpenSSL names)
CIPHER_SAMPLE = [
    "ECDHE-ECDSA-AES256-GCM-SHA384",
    "ECDHE-RSA-AES256-GCM-SHA384",
    "ECDHE-ECDSA-CHACHA20-POLY1305",
    "ECDHE-RSA-CHACHA20-POLY1305",
    "ECDHE-ECDSA-AES128-GCM-SHA256",
    "ECDHE-RSA-AES128-GCM-SHA256",
    "DHE-RSA-AES256-GCM-SHA384",
    "DHE-RSA-AES128-GCM-SHA256",
    "ECDHE-RSA-AES256-SHA384",
    "ECDHE-RSA-AES128-SHA256",
    "ECDHE-RSA-AES256-SHA",
    "ECDHE-RSA-AES128-SHA",
    "AES256-GCM-SHA384",
    "AES128-GCM-SHA256",
    "AES256-SHA",
    "AES128-SHA",
    "DES-CBC3-SHA",
    "RC4-SHA",
    "RC4-MD5",
]

# The ssl module cannot restrict TLS 1.3 suites
ENUMERABLE_VERSIONS = (TLSVersionId.TLS1_0, TLSVersionId.TLS1_1, TLSVersionId.TLS1_2)


async def _accepts(
    host: str,
    port: int,
    version: TLSVersionId,
    suite: str,
    timeout: float,
    semaphore: asyncio.Semaphore,
    address: str | None = None,
) -> bool:
    """Check whether the server negotiates exactly ``suite``."""
    async with semaphore:
        try:
            data = await handshake(
                host, port, version, timeout, f"{suite}:@SECLEVEL=0", address=address
            )
        except (asyncio.TimeoutError, TimeoutError, OSError, ValueError):
            # ssl.SSLError is an OSError: rejected suites and suites the
            # local library lacks both land here
            return False
    return bool(data.cipher) and data.cipher[0] == suite


async def enumerate_version(
    host: str,
    port: int,
    version: TLSVersionId,
    timeout: float,
    semaphore: asyncio.Semaphore,
    sample: list[str] | None = None,
    address: str | None = None,
) -> list[str]:
    """Suites from the sample accepted under one protocol version."""
    sample = sample or CIPHER_SAMPLE
    accepted = await asyncio.gather(
        *(_accepts(host, port, version, suite, timeout, semaphore, address) for suite in sample)
    )
    return [suite for suite, ok in zip(sample, accepted) if ok]


async def enumerate_ciphers(
    host: str,
    port: int,
    results: dict[TLSVersionId, ProtocolProbeResult],
    timeout: float = 8.0,
    concurrency: int = 4,
    sample: list[str] | None = None,
    address: str | None = None,
) -> dict[TLSVersionId, list[str]]:
    """
    Sample accepted cipher suites for every supported version.

    Versions are enumerated concurrently; TLS 1.3 reports only the suite
    seen in its probe.
    """
    semaphore = asyncio.Semaphore(concurrency)
    versions = [
        version
        for version in ENUMERABLE_VERSIONS
        if version in results and results[version].supported
    ]

    logger.debug("cipher_enumeration_started", host=host, versions=[v.value for v in versions])

    enumerated = await asyncio.gather(
        *(enumerate_version(host, port, v, timeout, semaphore, sample, address) for v in versions)
    )
    suites = dict(zip(versions, enumerated))

    tls13 = results.get(TLSVersionId.TLS1_3)
    if tls13 is not None and tls13.supported and tls13.cipher:
        suites[TLSVersionId.TLS1_3] = [tls13.cipher.name]

    return {version: suites[version] for version in results if version in suites}
