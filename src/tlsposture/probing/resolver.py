"""Hostname resolution ahead of probing."""

import asyncio

import dns.asyncresolver
import dns.exception
import dns.resolver

from tlsposture.core.exceptions import HostResolutionError
from tlsposture.core.logging import get_logger

logger = get_logger("resolver")

RECORD_TYPES = ("A", "AAAA")


async def _lookup(
    resolver: dns.asyncresolver.Resolver,
    hostname: str,
    record_type: str,
) -> tuple[list[str], str | None]:
    try:
        answer = await resolver.resolve(hostname, record_type)
    except (dns.resolver.NoAnswer, dns.resolver.NoNameservers) as e:
        return [], f"{record_type}: {e.__class__.__name__}"
    except dns.exception.Timeout:
        return [], f"{record_type}: timeout"
    return [str(rdata) for rdata in answer], None


async def resolve_host(hostname: str, timeout: float = 5.0) -> list[str]:
    """
    Resolve A and AAAA records for ``hostname``.

    Both lookups run concurrently, so resolution takes at most ``timeout``.
    IPv4 addresses come first. Raises HostResolutionError when neither
    record type yields an address.
    """
    resolver = dns.asyncresolver.Resolver()
    resolver.timeout = timeout
    resolver.lifetime = timeout

    try:
        lookups = await asyncio.gather(
            *(_lookup(resolver, hostname, record_type) for record_type in RECORD_TYPES)
        )
    except dns.resolver.NXDOMAIN:
        raise HostResolutionError(
            f"Domain does not exist: {hostname}", target=hostname
        ) from None

    addresses = [address for found, _ in lookups for address in found]
    errors = [error for _, error in lookups if error]

    if not addresses:
        raise HostResolutionError(
            f"Cannot resolve host: {hostname}",
            target=hostname,
            details={"errors": errors},
        )

    logger.debug("host_resolved", hostname=hostname, addresses=addresses)
    return addresses
