"""Scanner modules for tlsposture."""

from tlsposture.scanners.base import BaseScanner
from tlsposture.scanners.tls import TLSPostureScanner

__all__ = ["BaseScanner", "TLSPostureScanner"]
