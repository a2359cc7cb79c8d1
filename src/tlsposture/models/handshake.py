"""Client handshake simulation models."""

from pydantic import ConfigDict

from tlsposture.models.base import ReportSchema, TLSVersionId


class ClientProfile(ReportSchema):
    """A named client and the protocol version it negotiates."""

    model_config = ConfigDict(frozen=True)

    name: str
    protocol: TLSVersionId


class HandshakeResult(ReportSchema):
    """Simulated handshake outcome for one client profile."""

    client: str
    protocol: TLSVersionId
    success: bool
    cipher: str | None = None
    key_exchange: str | None = None
    reason: str | None = None
