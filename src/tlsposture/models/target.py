"""Evaluation target model and domain input parsing."""

import re

from pydantic import ConfigDict, Field, field_validator

from tlsposture.core.exceptions import ValidationError
from tlsposture.models.base import BaseSchema

# Forbidden domain patterns (SSRF protection)
FORBIDDEN_DOMAINS = [
    "localhost",
    "localhost.localdomain",
    "internal",
    "intranet",
    "corp",
    "local",
]

# Forbidden domain suffixes
FORBIDDEN_DOMAIN_SUFFIXES = [
    ".internal",
    ".local",
    ".localhost",
    ".corp",
    ".intranet",
]

ALLOWED_SCHEMES = ("http", "https")

DOMAIN_PATTERN = re.compile(
    r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$"
)
SCHEME_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*)://")


def extract_hostname(raw: str | None) -> str:
    """
    Extract a hostname from a bare host or URL.

    The scheme, path, query, fragment and port suffix are discarded.
    Raises ValueError when the input cannot name a host.
    """
    if raw is None or not raw.strip():
        raise ValueError("Domain is required")

    value = raw.strip()
    if any(ch.isspace() for ch in value):
        raise ValueError("Domain must not contain whitespace")

    match = SCHEME_PATTERN.match(value)
    if match:
        if match.group(1).lower() not in ALLOWED_SCHEMES:
            raise ValueError(f"Unsupported URL scheme: {match.group(1)}")
        value = value[match.end():]
    elif "://" in value:
        raise ValueError(f"Invalid URL: {raw}")

    for separator in ("/", "?", "#"):
        value = value.split(separator, 1)[0]

    # Drop credentials and port
    value = value.rsplit("@", 1)[-1]
    value = value.split(":", 1)[0]
    value = value.rstrip(".")

    if len(value) < 3:
        raise ValueError(f"Domain too short: {raw}")

    return value


class TargetHost(BaseSchema):
    """A validated hostname and port to evaluate."""

    model_config = ConfigDict(frozen=True)

    hostname: str = Field(description="Target DNS name")
    port: int = Field(default=443, ge=1, le=65535)
    addresses: tuple[str, ...] = Field(
        default=(), description="Addresses the hostname resolved to"
    )

    @field_validator("hostname")
    @classmethod
    def validate_hostname(cls, v: str) -> str:
        # Length check
        if len(v) > 253:
            raise ValueError("Domain too long (max 253 characters)")

        if not DOMAIN_PATTERN.match(v):
            raise ValueError(f"Invalid domain format: {v}")

        domain_lower = v.lower()

        # Prevent internal/localhost probing
        if domain_lower in FORBIDDEN_DOMAINS:
            raise ValueError(f"Cannot evaluate internal domain: {v}")

        for suffix in FORBIDDEN_DOMAIN_SUFFIXES:
            if domain_lower.endswith(suffix):
                raise ValueError(f"Cannot evaluate internal domain: {v}")

        return domain_lower

    @classmethod
    def from_input(cls, raw: str | None, port: int = 443) -> "TargetHost":
        """
        Build a target from user input (bare host or URL).

        Raises ValidationError naming the first problem found.
        """
        try:
            return cls(hostname=extract_hostname(raw), port=port)
        except ValueError as e:
            raise ValidationError(_first_error(e), field="domain") from e

    def with_addresses(self, addresses: list[str]) -> "TargetHost":
        """Return a copy carrying resolved addresses."""
        return self.model_copy(update={"addresses": tuple(addresses)})

    @property
    def identifier(self) -> str:
        """Return primary target identifier."""
        if self.port == 443:
            return self.hostname
        return f"{self.hostname}:{self.port}"


class EvaluationOptions(BaseSchema):
    """Per-evaluation overrides of the configured defaults."""

    enumerate_ciphers: bool | None = None
    check_hsts: bool | None = None
    probe_timeout: float | None = Field(default=None, ge=1, le=60)


def _first_error(error: ValueError) -> str:
    """Readable message for plain and pydantic validation errors."""
    errors = getattr(error, "errors", None)
    if callable(errors):
        details = errors()
        if details:
            return str(details[0].get("msg", error))
    return str(error)
