"""Abstract interfaces for scanner modules."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from tlsposture.models import EvaluationOptions, TargetHost

# Type variable for scanner results
TResult = TypeVar("TResult", bound=BaseModel)


class IScanner(ABC, Generic[TResult]):
    """Base interface for all scanner modules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Scanner module name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description."""
        ...

    @abstractmethod
    async def scan(
        self,
        target: TargetHost,
        options: EvaluationOptions | None = None,
    ) -> TResult:
        """Execute the scan and return results."""
        ...

    @abstractmethod
    async def validate_target(self, target: TargetHost) -> bool:
        """Check if this scanner can handle the target."""
        ...

    @abstractmethod
    def get_capabilities(self) -> list[str]:
        """List of capabilities this scanner provides."""
        ...
