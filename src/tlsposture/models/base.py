"""Base models and enums."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )


class ReportSchema(BaseSchema):
    """Schema serialised with camelCase keys in API and JSON output."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Severity(str, Enum):
    """Finding severity levels."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @property
    def rank(self) -> int:
        """Sort key, most severe first."""
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = [
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.NONE,
]


class TLSVersionId(str, Enum):
    """Protocol versions the probe can pin."""

    TLS1_0 = "TLSv1"
    TLS1_1 = "TLSv1.1"
    TLS1_2 = "TLSv1.2"
    TLS1_3 = "TLSv1.3"

    @property
    def display_name(self) -> str:
        return {
            TLSVersionId.TLS1_0: "TLS 1.0",
            TLSVersionId.TLS1_1: "TLS 1.1",
            TLSVersionId.TLS1_2: "TLS 1.2",
            TLSVersionId.TLS1_3: "TLS 1.3",
        }[self]


# Canonical order used for aggregation and output
TLS_VERSIONS = [
    TLSVersionId.TLS1_0,
    TLSVersionId.TLS1_1,
    TLSVersionId.TLS1_2,
    TLSVersionId.TLS1_3,
]
