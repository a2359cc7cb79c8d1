"""Network probing: handshakes, cipher enumeration, protocol details."""

from tlsposture.probing.connection import probe, probe_all
from tlsposture.probing.ciphers import CIPHER_SAMPLE, enumerate_ciphers
from tlsposture.probing.details import collect_protocol_details
from tlsposture.probing.resolver import resolve_host

__all__ = [
    "probe",
    "probe_all",
    "CIPHER_SAMPLE",
    "enumerate_ciphers",
    "collect_protocol_details",
    "resolve_host",
]
