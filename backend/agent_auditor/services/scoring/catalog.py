"""
Catalog Assembly - fixed, ordered rule lists per audit type.

A rule whose required slots were all left out of the submission is not run;
it reports N/A instead, which carries no fix and costs no points.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from agent_auditor.services.documents import DocumentSet, Slot
from agent_auditor.services.scoring.models import Check, Severity, Status
from agent_auditor.logger import logger


@dataclass(frozen=True)
class Rule:
    """One severity-tagged detection policy."""
    id: str
    severity: Severity
    evaluator: Callable[["Rule", DocumentSet], Check]
    requires: tuple[Slot, ...] = ()

    def passed(self, message: str) -> Check:
        return Check(self.id, self.severity, Status.PASS, message)

    def failed(self, message: str, fix: str) -> Check:
        return Check(self.id, self.severity, Status.FAIL, message, fix)

    def warned(self, message: str, fix: str) -> Check:
        return Check(self.id, self.severity, Status.WARN, message, fix)

    def not_applicable(self) -> Check:
        names = " / ".join(slot.value for slot in self.requires)
        return Check(self.id, self.severity, Status.NOT_APPLICABLE, f"Check skipped: {names} not provided")

    def applies_to(self, documents: DocumentSet) -> bool:
        return not self.requires or any(documents.has(slot) for slot in self.requires)

    def evaluate(self, documents: DocumentSet) -> Check:
        if not self.applies_to(documents):
            return self.not_applicable()
        return self.evaluator(self, documents)


@dataclass(frozen=True)
class Catalog:
    """Ordered rules for one audit type."""
    name: str
    rules: tuple[Rule, ...]
    policy_blockers: frozenset[str] = field(default_factory=frozenset)
    all_passed_message: str = "All checks passed."

    def __post_init__(self):
        ids = [rule.id for rule in self.rules]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"CRITICAL: duplicate rule ids in {self.name} catalog: {duplicates}")
        unknown = sorted(self.policy_blockers - set(ids))
        if unknown:
            raise ValueError(f"CRITICAL: policy blockers {unknown} are not rules of the {self.name} catalog")

    @property
    def rule_ids(self) -> list[str]:
        return [rule.id for rule in self.rules]

    def evaluate(self, documents: DocumentSet) -> list[Check]:
        """Run every rule in declaration order."""
        checks = [rule.evaluate(documents) for rule in self.rules]
        logger.debug(
            f"{self.name} catalog: {len(checks)} checks over slots "
            f"{[slot.value for slot in documents.supplied]}"
        )
        return checks


def build_catalog(
    name: str,
    rules: Iterable[Rule],
    policy_blockers: Optional[Iterable[str]] = None,
    all_passed_message: str = "All checks passed.",
) -> Catalog:
    return Catalog(
        name=name,
        rules=tuple(rules),
        policy_blockers=frozenset(policy_blockers or ()),
        all_passed_message=all_passed_message,
    )
