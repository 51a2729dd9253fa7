"""
Audit Runner - Main orchestrator for agent audits.

Coordinates document normalization, catalog evaluation, scoring and
recommendations. Pure and synchronous: no I/O, no shared state.
"""
import uuid
from datetime import datetime, timezone
from typing import Mapping, Optional

from agent_auditor.logger import logger
from agent_auditor.services.documents import DocumentSet
from agent_auditor.services.scoring.catalog import Catalog
from agent_auditor.services.scoring.engine import ScoringEngine
from agent_auditor.services.scoring.gdpr_checks import GDPR_CATALOG
from agent_auditor.services.scoring.recommendations import build_recommendations
from agent_auditor.services.scoring.security_checks import SECURITY_CATALOG
from agent_auditor.schemas.audit_result import AuditResult, AuditType, CheckResult


DEFAULT_CATALOGS = {
    AuditType.SECURITY: SECURITY_CATALOG,
    AuditType.GDPR: GDPR_CATALOG,
}


class AuditRunner:
    """Orchestrates the complete audit process."""

    def __init__(
        self,
        scoring_engine: Optional[ScoringEngine] = None,
        catalogs: Optional[Mapping[AuditType, Catalog]] = None,
    ):
        self.scoring_engine = scoring_engine or ScoringEngine()
        self.catalogs = dict(catalogs or DEFAULT_CATALOGS)

    def run(
        self,
        audit_type: AuditType,
        files: Optional[Mapping[str, Optional[str]]],
        audit_id: Optional[str] = None,
    ) -> AuditResult:
        """
        Run one audit over the submitted documents.

        Args:
            audit_type: Which catalog to run
            files: Slot name -> optional text
            audit_id: Identifier to stamp; a uuid4 is generated when omitted

        Returns:
            AuditResult with checks, score, grade and certification decision
        """
        audit_type = AuditType(audit_type)
        catalog = self.catalogs[audit_type]
        audit_id = audit_id or str(uuid.uuid4())

        documents = DocumentSet.from_mapping(files)
        logger.info(
            f"Starting {audit_type.value} audit {audit_id} "
            f"(slots={[slot.value for slot in documents.supplied]})"
        )

        checks = catalog.evaluate(documents)
        scores = self.scoring_engine.score(checks, catalog.policy_blockers)
        recommendations = build_recommendations(checks, catalog.all_passed_message)

        return AuditResult(
            id=audit_id,
            type=audit_type,
            timestamp=datetime.now(timezone.utc),
            score=scores.score,
            grade=scores.grade,
            checks=[CheckResult.from_check(check) for check in checks],
            recommendations=recommendations,
            certifiable=scores.certifiable,
            blockers=scores.blockers,
            blockers_technical=scores.blockers_technical,
            blockers_policy=scores.blockers_policy,
            scoring_version=scores.scoring_version,
        )
