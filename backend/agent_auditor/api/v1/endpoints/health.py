"""
Health check endpoint.
"""

from fastapi import APIRouter, Request

from agent_auditor.services.scoring.weights import SCORING_VERSION

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "ok"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with loaded catalogs."""
    runner = request.app.state.audit_runner

    return {
        "status": "ok",
        "scoring_version": SCORING_VERSION,
        "catalogs": {
            audit_type.value: {
                "rules": len(catalog.rules),
                "rule_ids": catalog.rule_ids,
                "policy_blockers": sorted(catalog.policy_blockers),
            }
            for audit_type, catalog in runner.catalogs.items()
        },
    }
