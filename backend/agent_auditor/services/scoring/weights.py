"""
Scoring Calibration - v2.0

Severity penalties, grade bands and the certification gate. One calibration
applies to every catalog.
"""

from dataclasses import dataclass

from agent_auditor.services.scoring.models import Severity


@dataclass
class SeverityPenalties:
    """Points subtracted from 100 per FAIL verdict."""
    critical: int = 25
    high: int = 12
    medium: int = 6
    low: int = 3

    def for_severity(self, severity: Severity) -> int:
        return getattr(self, severity.value.lower())


@dataclass
class GradeThresholds:
    """Inclusive lower bound of each letter grade; anything below D is F."""
    a: int = 90
    b: int = 75
    c: int = 60
    d: int = 40

    def bands(self) -> list[tuple[int, str]]:
        return [(self.a, "A"), (self.b, "B"), (self.c, "C"), (self.d, "D")]


# Default calibration instances
SEVERITY_PENALTIES = SeverityPenalties()
GRADE_THRESHOLDS = GradeThresholds()

MAX_SCORE = 100
CERTIFICATION_MIN_SCORE = 75

# FAIL at these severities blocks certification on its own
BLOCKING_SEVERITIES = frozenset({Severity.CRITICAL, Severity.HIGH})

# Scoring version
SCORING_VERSION = "2.0"

# --- Validation (Prevent Drift) ---
def _validate_weights():
    """Ensure the calibration is complete and ordered."""
    # 1. Every severity has a positive penalty
    for severity in Severity:
        penalty = SEVERITY_PENALTIES.for_severity(severity)
        if penalty <= 0:
            raise ValueError(f"CRITICAL: penalty for {severity.value} is {penalty}, expected > 0")

    # 2. Heavier severities never cost less
    ordered = [SEVERITY_PENALTIES.for_severity(s) for s in Severity]
    if ordered != sorted(ordered, reverse=True):
        raise ValueError(f"CRITICAL: severity penalties {ordered} are not descending")

    # 3. Grade bands strictly descending inside [0, 100]
    bounds = [bound for bound, _ in GRADE_THRESHOLDS.bands()]
    if bounds != sorted(set(bounds), reverse=True) or bounds[0] > MAX_SCORE or bounds[-1] < 0:
        raise ValueError(f"CRITICAL: grade thresholds {bounds} must be strictly descending within 0-{MAX_SCORE}")

_validate_weights()
