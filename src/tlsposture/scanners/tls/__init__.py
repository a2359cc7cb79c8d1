"""TLS posture scanner."""

from tlsposture.scanners.tls.scanner import TLSPostureScanner

__all__ = ["TLSPostureScanner"]
