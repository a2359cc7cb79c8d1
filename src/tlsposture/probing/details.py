"""Supplementary protocol details (HSTS, compression, ALPN)."""

import httpx

from tlsposture.core.logging import get_logger
from tlsposture.models import ProtocolDetails, ProtocolProbeResult, TargetHost

logger = get_logger("protocol_details")


def parse_hsts(header: str) -> tuple[int | None, bool, bool]:
    """Parse a Strict-Transport-Security header value."""
    max_age = None
    include_subdomains = False
    preload = False

    for directive in header.split(";"):
        directive = directive.strip()
        lower = directive.lower()
        if lower.startswith("max-age="):
            value = directive.split("=", 1)[1].strip().strip('"')
            try:
                max_age = int(value)
            except ValueError:
                max_age = None
        elif lower == "includesubdomains":
            include_subdomains = True
        elif lower == "preload":
            preload = True

    return max_age, include_subdomains, preload


async def fetch_hsts(
    target: TargetHost,
    timeout: float = 10.0,
) -> tuple[bool | None, int | None, bool, bool]:
    """
    Read the HSTS header with a single HEAD request.

    Returns ``(None, None, False, False)`` when the request fails, since
    nothing was measured.
    """
    url = f"https://{target.hostname}:{target.port}/"
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            verify=False,
            follow_redirects=False,
        ) as client:
            response = await client.head(url)
    except httpx.HTTPError as e:
        logger.debug("hsts_check_failed", target=target.identifier, error=str(e))
        return None, None, False, False

    header = response.headers.get("strict-transport-security")
    if not header:
        return False, None, False, False

    max_age, include_subdomains, preload = parse_hsts(header)
    # max-age=0 instructs browsers to forget the policy
    enabled = max_age is not None and max_age > 0
    return enabled, max_age, include_subdomains, preload


async def collect_protocol_details(
    target: TargetHost,
    primary: ProtocolProbeResult | None,
    check_hsts: bool = True,
    timeout: float = 10.0,
) -> ProtocolDetails:
    """Gather measured flags; unmeasurable ones stay ``None``."""
    details = ProtocolDetails()

    if primary is not None and primary.supported:
        details.compression = primary.compression is not None
        details.alpn = primary.alpn

    if check_hsts:
        hsts, max_age, include_subdomains, preload = await fetch_hsts(target, timeout)
        details.hsts = hsts
        details.hsts_max_age = max_age
        details.hsts_include_subdomains = include_subdomains
        details.hsts_preload = preload

    return details
