"""
Pydantic schemas for audit responses.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Literal
from pydantic import BaseModel, Field

from agent_auditor.services.scoring.models import Check, Severity, Status


class AuditType(str, Enum):
    """Which catalog an audit runs."""
    SECURITY = "security"
    GDPR = "gdpr"


class CheckResult(BaseModel):
    """Individual check result."""
    id: str
    severity: Severity
    status: Status
    message: str
    fix: Optional[str] = None

    @classmethod
    def from_check(cls, check: Check) -> "CheckResult":
        return cls(
            id=check.id,
            severity=check.severity,
            status=check.status,
            message=check.message,
            fix=check.fix,
        )


class AuditResult(BaseModel):
    """Complete audit response."""
    # Identification
    id: str
    type: AuditType
    timestamp: datetime

    # Scores
    score: int = Field(..., ge=0, le=100)
    grade: Literal["A", "B", "C", "D", "F"]

    # Details
    checks: list[CheckResult] = []
    recommendations: list[str] = []

    # Certification
    certifiable: bool
    blockers: list[str] = []
    blockers_technical: list[str] = []
    blockers_policy: list[str] = []

    # Metadata
    scoring_version: str = "2.0"

    class Config:
        json_schema_extra = {
            "example": {
                "id": "3f1c2a9e-8d7b-4c55-9a0e-2b6f1d4e7c10",
                "type": "security",
                "timestamp": "2024-01-01T12:00:00Z",
                "score": 76,
                "grade": "B",
                "checks": [
                    {
                        "id": "SEC-02",
                        "severity": "HIGH",
                        "status": "FAIL",
                        "message": "dmPolicy is not configured in the agent config",
                        "fix": "Add a dmPolicy configuration to restrict direct message handling and define allowed communication patterns."
                    }
                ],
                "recommendations": ["[SEC-02] Add a dmPolicy configuration to restrict direct message handling and define allowed communication patterns."],
                "certifiable": False,
                "blockers": ["SEC-02"],
                "blockers_technical": ["SEC-02"],
                "blockers_policy": []
            }
        }


class AuditSummary(BaseModel):
    """One row of the audit history."""
    id: str
    type: AuditType
    timestamp: datetime
    score: int
    grade: str
    certifiable: bool


class AuditHistory(BaseModel):
    """Paged audit history."""
    audits: list[AuditSummary]
    total: int
    limit: int
    offset: int
