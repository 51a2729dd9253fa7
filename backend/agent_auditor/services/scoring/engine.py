"""
Scoring Engine - Folds an ordered verdict list into score, grade and
certification decision.

Steps:
- Start at 100, subtract the severity penalty of every FAIL
- Clamp to [0, 100] and map to a letter grade
- Collect technical blockers (CRITICAL/HIGH FAIL) and policy blockers
  (allow-listed ids that FAIL or WARN)
- Certifiable when nothing blocks and the score clears the gate
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from agent_auditor.services.scoring.models import Check, Status
from agent_auditor.services.scoring.weights import (
    BLOCKING_SEVERITIES,
    CERTIFICATION_MIN_SCORE,
    GRADE_THRESHOLDS,
    MAX_SCORE,
    SCORING_VERSION,
    SEVERITY_PENALTIES,
)
from agent_auditor.logger import logger


@dataclass
class ScoreResult:
    """Complete scoring result."""
    score: int
    grade: str
    certifiable: bool
    blockers: list[str] = field(default_factory=list)
    blockers_technical: list[str] = field(default_factory=list)
    blockers_policy: list[str] = field(default_factory=list)

    # Metadata
    scoring_version: str = SCORING_VERSION


def grade_for(score: int) -> str:
    """Letter grade for a clamped score; bounds are inclusive."""
    for lower_bound, grade in GRADE_THRESHOLDS.bands():
        if score >= lower_bound:
            return grade
    return "F"


def _unique(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


class ScoringEngine:
    """Turns catalog verdicts into a score and certification decision."""

    def score(self, checks: list[Check], policy_blocker_ids: Optional[Iterable[str]] = None) -> ScoreResult:
        """Score an ordered verdict list.

        Args:
            checks: Verdicts in catalog order
            policy_blocker_ids: Rule ids that block certification on FAIL or WARN

        Returns:
            ScoreResult with score, grade, blockers and certifiability
        """
        policy_ids = frozenset(policy_blocker_ids or ())

        score = MAX_SCORE
        technical = []
        policy = []

        for check in checks:
            if check.status == Status.FAIL:
                score -= SEVERITY_PENALTIES.for_severity(check.severity)
                if check.severity in BLOCKING_SEVERITIES:
                    technical.append(check.id)

            if check.id in policy_ids and check.status in (Status.FAIL, Status.WARN):
                policy.append(check.id)

        score = max(0, min(MAX_SCORE, score))
        grade = grade_for(score)

        technical = _unique(technical)
        policy = _unique(policy)
        blockers = _unique(technical + policy)
        certifiable = not blockers and score >= CERTIFICATION_MIN_SCORE

        logger.info(
            f"Scored {len(checks)} checks: score={score}, grade={grade}, "
            f"certifiable={certifiable}, blockers={blockers}"
        )

        return ScoreResult(
            score=score,
            grade=grade,
            certifiable=certifiable,
            blockers=blockers,
            blockers_technical=technical,
            blockers_policy=policy,
        )
