"""
Recommendation Builder - remediation lines in catalog order.
"""

from agent_auditor.services.scoring.models import Check


def build_recommendations(checks: list[Check], all_passed_message: str) -> list[str]:
    """One "[<id>] <fix>" line per FAIL/WARN verdict, or the all-passed sentence."""
    recs = [f"[{check.id}] {check.fix}" for check in checks if check.fix is not None]

    if not recs:
        recs.append(all_passed_message)

    return recs
