"""Posture grade model."""

from typing import Literal

from pydantic import ConfigDict, Field

from tlsposture.models.base import ReportSchema
from tlsposture.models.findings import CipherFinding

Grade = Literal["A+", "A", "B", "C", "D", "E", "F"]
SecurityLevel = Literal["Excellent", "Good", "Fair", "Poor"]


class PostureGrade(ReportSchema):
    """Composite grade for a target host."""

    model_config = ConfigDict(frozen=True)

    grade: Grade
    score: int = Field(ge=0, le=100)
    findings: list[CipherFinding] = Field(default_factory=list)
    security_level: SecurityLevel

    @property
    def is_passing(self) -> bool:
        return self.grade in ("A+", "A", "B")
