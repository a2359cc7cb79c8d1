"""Pinned-version TLS connection probe."""

import asyncio
import ssl
import time
from typing import NamedTuple

from tlsposture.analysis.cipher import classify_cipher
from tlsposture.core.logging import get_logger
from tlsposture.models import (
    EphemeralKey,
    NegotiatedCipher,
    ProtocolProbeResult,
    TLSVersionId,
    TLS_VERSIONS,
)
from tlsposture.models.probe import (
    CONNECTION_REFUSED,
    CONNECTION_RESET,
    PROBE_TIMEOUT,
    PROTOCOL_NOT_OFFERED,
)

logger = get_logger("probe")

SSL_VERSIONS = {
    TLSVersionId.TLS1_0: ssl.TLSVersion.TLSv1,
    TLSVersionId.TLS1_1: ssl.TLSVersion.TLSv1_1,
    TLSVersionId.TLS1_2: ssl.TLSVersion.TLSv1_2,
    TLSVersionId.TLS1_3: ssl.TLSVersion.TLSv1_3,
}

# Lets the client offer legacy versions and suites so the server decides
DEFAULT_CIPHERS = "ALL:@SECLEVEL=0"
ALPN_PROTOCOLS = ["h2", "http/1.1"]

# Upper bound for the TLS close after a completed handshake
CLOSE_TIMEOUT = 1.0


class HandshakeData(NamedTuple):
    """Raw data captured from one completed handshake."""

    cipher: tuple[str, str, int] | None
    version: str | None
    chain: list[bytes]
    compression: str | None
    alpn: str | None
    latency_ms: float


def build_context(
    version: TLSVersionId,
    ciphers: str = DEFAULT_CIPHERS,
) -> ssl.SSLContext:
    """Create a non-verifying client context pinned to one protocol version."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    context.set_ciphers(ciphers)
    context.minimum_version = SSL_VERSIONS[version]
    context.maximum_version = SSL_VERSIONS[version]
    context.set_alpn_protocols(ALPN_PROTOCOLS)
    return context


def _peer_chain(ssl_object: ssl.SSLObject) -> list[bytes]:
    """DER certificates sent by the peer, leaf first."""
    chain: list[bytes] = []
    get_chain = getattr(ssl_object, "get_unverified_chain", None)
    if get_chain is not None:
        chain = [bytes(cert) for cert in get_chain() or []]
    if not chain:
        leaf = ssl_object.getpeercert(binary_form=True)
        if leaf:
            chain = [leaf]
    return chain


async def _close(writer: asyncio.StreamWriter, timeout: float) -> None:
    writer.close()
    try:
        await asyncio.wait_for(writer.wait_closed(), timeout=max(timeout, 0))
    except (OSError, asyncio.TimeoutError, TimeoutError) as e:
        # The handshake result is already captured
        logger.debug("close_failed", error=str(e) or e.__class__.__name__)
        writer.transport.abort()


async def handshake(
    host: str,
    port: int,
    version: TLSVersionId,
    timeout: float,
    ciphers: str = DEFAULT_CIPHERS,
    address: str | None = None,
) -> HandshakeData:
    """
    Perform one handshake on the event loop. No application data is sent.

    ``timeout`` bounds the TCP connect, the TLS handshake and the close
    together. Connecting to a resolved ``address`` keeps name resolution off the
    executor; SNI still carries ``host``.
    """
    context = build_context(version, ciphers)
    started = time.perf_counter()

    _, writer = await asyncio.wait_for(
        asyncio.open_connection(
            address or host,
            port,
            ssl=context,
            server_hostname=host,
        ),
        timeout=timeout,
    )
    latency_ms = (time.perf_counter() - started) * 1000
    try:
        ssl_object = writer.get_extra_info("ssl_object")
        return HandshakeData(
            cipher=ssl_object.cipher(),
            version=ssl_object.version(),
            chain=_peer_chain(ssl_object),
            compression=ssl_object.compression(),
            alpn=ssl_object.selected_alpn_protocol(),
            latency_ms=round(latency_ms, 2),
        )
    finally:
        elapsed = time.perf_counter() - started
        await _close(writer, min(CLOSE_TIMEOUT, timeout - elapsed))


def _result_from_handshake(
    version: TLSVersionId, data: HandshakeData
) -> ProtocolProbeResult:
    cipher = None
    key = None
    if data.cipher:
        name, protocol, bits = data.cipher
        props = classify_cipher(name, bits)
        cipher = NegotiatedCipher(
            name=name,
            protocol=protocol,
            bits=bits,
            aead=props.has_aead,
            forward_secrecy=props.forward_secrecy,
        )
        key = EphemeralKey(algorithm=props.key_exchange)

    return ProtocolProbeResult(
        version=version,
        supported=True,
        cipher=cipher,
        ephemeral_key=key,
        negotiated_protocol=data.version,
        latency_ms=data.latency_ms,
        certificate_chain=data.chain,
        compression=data.compression,
        alpn=data.alpn,
    )


async def probe(
    host: str,
    port: int = 443,
    version: TLSVersionId = TLSVersionId.TLS1_2,
    timeout: float = 8.0,
    address: str | None = None,
) -> ProtocolProbeResult:
    """
    Attempt a handshake pinned to exactly one protocol version.

    Network failures are reported in the result's ``error`` field and never
    raised: a rejected version is a normal outcome. The timeout starts
    with the connection attempt itself.
    """
    started = time.perf_counter()

    def failed(error: str) -> ProtocolProbeResult:
        return ProtocolProbeResult(
            version=version,
            supported=False,
            error=error,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
        )

    try:
        data = await handshake(host, port, version, timeout, address=address)
    except (asyncio.TimeoutError, TimeoutError):
        result = failed(PROBE_TIMEOUT)
    except ssl.SSLError as e:
        logger.debug("handshake_rejected", host=host, version=version.value, error=str(e))
        result = failed(PROTOCOL_NOT_OFFERED)
    except ConnectionRefusedError:
        result = failed(CONNECTION_REFUSED)
    except ConnectionResetError:
        result = failed(CONNECTION_RESET)
    except ValueError as e:
        # The local TLS library cannot pin this version
        logger.debug("version_unavailable", version=version.value, error=str(e))
        result = failed("protocol unavailable in local TLS library")
    except OSError as e:
        result = failed(str(e) or e.__class__.__name__)
    else:
        result = _result_from_handshake(version, data)

    logger.debug(
        "probe_completed",
        host=host,
        port=port,
        version=version.value,
        supported=result.supported,
        error=result.error,
    )
    return result


async def probe_all(
    host: str,
    port: int = 443,
    versions: list[TLSVersionId] | None = None,
    timeout: float = 8.0,
    address: str | None = None,
) -> dict[TLSVersionId, ProtocolProbeResult]:
    """Probe every version concurrently and key the results by version."""
    versions = versions or TLS_VERSIONS
    results = await asyncio.gather(
        *(probe(host, port, version, timeout, address) for version in versions)
    )
    by_version = {result.version: result for result in results}
    return {version: by_version[version] for version in TLS_VERSIONS if version in by_version}
