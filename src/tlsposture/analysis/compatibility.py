"""Browser and platform support per protocol version."""

from tlsposture.models import PlatformSupport, TLSVersionId, VersionCompatibility


def _support(
    status: str,
    min: str | None = None,
    max: str | None = None,
    current: bool = False,
) -> PlatformSupport:
    return PlatformSupport(min=min, max=max, current=current, status=status)


BROWSER_SUPPORT = {
    TLSVersionId.TLS1_0: {
        "Chrome": _support("deprecated", "1", "96"),
        "Firefox": _support("deprecated", "1", "96"),
        "Safari": _support("deprecated", "1", "14"),
        "Edge": _support("deprecated", "12", "96"),
        "IE": _support("deprecated", "7", "11"),
    },
    TLSVersionId.TLS1_1: {
        "Chrome": _support("deprecated", "22", "96"),
        "Firefox": _support("deprecated", "24", "96"),
        "Safari": _support("deprecated", "7", "14"),
        "Edge": _support("deprecated", "12", "96"),
        "IE": _support("deprecated", "11", "11"),
    },
    TLSVersionId.TLS1_2: {
        "Chrome": _support("supported", "30", current=True),
        "Firefox": _support("supported", "27", current=True),
        "Safari": _support("supported", "7", current=True),
        "Edge": _support("supported", "12", current=True),
        "IE": _support("supported", "11", current=True),
    },
    TLSVersionId.TLS1_3: {
        "Chrome": _support("recommended", "70", current=True),
        "Firefox": _support("recommended", "63", current=True),
        "Safari": _support("recommended", "12.1", current=True),
        "Edge": _support("recommended", "79", current=True),
        "IE": _support("unsupported"),
    },
}

DEVICE_SUPPORT = {
    TLSVersionId.TLS1_0: {
        "Android": _support("deprecated", "1.0", "9"),
        "iOS": _support("deprecated", "1.0", "12"),
        "Windows": _support("deprecated", "Vista", current=True),
        "macOS": _support("deprecated", "10.6", current=True),
        "Linux": _support("deprecated", "All", current=True),
    },
    TLSVersionId.TLS1_1: {
        "Android": _support("deprecated", "4.1", "9"),
        "iOS": _support("deprecated", "5.0", "12"),
        "Windows": _support("deprecated", "7", current=True),
        "macOS": _support("deprecated", "10.9", current=True),
        "Linux": _support("deprecated", "All", current=True),
    },
    TLSVersionId.TLS1_2: {
        "Android": _support("supported", "4.1", current=True),
        "iOS": _support("supported", "5.0", current=True),
        "Windows": _support("supported", "7", current=True),
        "macOS": _support("supported", "10.9", current=True),
        "Linux": _support("supported", "All", current=True),
    },
    TLSVersionId.TLS1_3: {
        "Android": _support("recommended", "10", current=True),
        "iOS": _support("recommended", "12.2", current=True),
        "Windows": _support("recommended", "11", current=True),
        "macOS": _support("recommended", "10.15", current=True),
        "Linux": _support("recommended", "Modern", current=True),
    },
}


def compatibility_for(version: TLSVersionId) -> VersionCompatibility:
    """Browser and device support table for one protocol version."""
    return VersionCompatibility(
        browsers=BROWSER_SUPPORT.get(version, {}),
        devices=DEVICE_SUPPORT.get(version, {}),
    )
