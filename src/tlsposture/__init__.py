"""tlsposture - TLS and certificate posture evaluation."""

from tlsposture.version import __version__

__all__ = ["__version__"]
