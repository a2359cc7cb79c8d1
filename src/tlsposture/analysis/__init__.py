"""Certificate, cipher and protocol analysis."""

from tlsposture.analysis.certificate import evaluate_certificate
from tlsposture.analysis.cipher import analyze_cipher, classify_cipher
from tlsposture.analysis.compatibility import compatibility_for
from tlsposture.analysis.grading import grade
from tlsposture.analysis.handshake import DEFAULT_CLIENT_CATALOG, HandshakeSimulator
from tlsposture.analysis.protocol import analyze_protocols
from tlsposture.analysis.recommendations import build_recommendations

__all__ = [
    "evaluate_certificate",
    "analyze_cipher",
    "classify_cipher",
    "compatibility_for",
    "grade",
    "DEFAULT_CLIENT_CATALOG",
    "HandshakeSimulator",
    "analyze_protocols",
    "build_recommendations",
]
