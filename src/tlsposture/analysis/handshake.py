"""Client handshake simulation."""

from collections.abc import Mapping, Sequence

from tlsposture.models import (
    ClientProfile,
    HandshakeResult,
    ProtocolProbeResult,
    TLSVersionId,
)

PROTOCOL_NOT_SUPPORTED = "protocol not supported"

DEFAULT_CLIENT_CATALOG: tuple[ClientProfile, ...] = (
    ClientProfile(name="Chrome 109 / Win 10", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="Firefox 115 / Win 10", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="Edge 109 / Win 10", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="Safari 16 / macOS 13", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="Safari 16 / iOS 16", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="Android 11", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="Java 11", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="OpenSSL 1.1.1", protocol=TLSVersionId.TLS1_3),
    ClientProfile(name="IE 11 / Win 10", protocol=TLSVersionId.TLS1_2),
    ClientProfile(name="Android 7.0", protocol=TLSVersionId.TLS1_2),
    ClientProfile(name="Java 8u161", protocol=TLSVersionId.TLS1_2),
    ClientProfile(name="Safari 9 / iOS 9", protocol=TLSVersionId.TLS1_2),
    ClientProfile(name="IE 10 / Win 7", protocol=TLSVersionId.TLS1_0),
    ClientProfile(name="Android 4.3", protocol=TLSVersionId.TLS1_0),
    ClientProfile(name="Java 6u45", protocol=TLSVersionId.TLS1_0),
)


class HandshakeSimulator:
    """Maps named client profiles onto already-gathered probe results.

    Opens no connections: each profile only selects which protocol bucket
    of the probe results to report.
    """

    def __init__(self, catalog: Sequence[ClientProfile] = DEFAULT_CLIENT_CATALOG) -> None:
        self.catalog = tuple(catalog)

    def simulate(
        self,
        results: Mapping[TLSVersionId | str, ProtocolProbeResult],
    ) -> list[HandshakeResult]:
        simulations = []
        for profile in self.catalog:
            result = results.get(profile.protocol)
            if result is not None and result.supported:
                simulations.append(
                    HandshakeResult(
                        client=profile.name,
                        protocol=profile.protocol,
                        success=True,
                        cipher=result.cipher.name if result.cipher else None,
                        key_exchange=(
                            result.ephemeral_key.algorithm if result.ephemeral_key else None
                        ),
                    )
                )
            else:
                simulations.append(
                    HandshakeResult(
                        client=profile.name,
                        protocol=profile.protocol,
                        success=False,
                        reason=PROTOCOL_NOT_SUPPORTED,
                    )
                )
        return simulations
