from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Fixed per rule, independent of outcome."""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Status(str, Enum):
    """Rule outcome."""
    PASS = "PASS"
    FAIL = "FAIL"
    WARN = "WARN"
    NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class Check:
    """Individual rule verdict."""
    id: str
    severity: Severity
    status: Status
    message: str
    fix: Optional[str] = None  # set only for FAIL / WARN
