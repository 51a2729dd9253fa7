"""
Audit API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from agent_auditor.logger import logger
from agent_auditor.schemas.audit_request import AuditRequest
from agent_auditor.schemas.audit_result import AuditHistory, AuditResult, AuditSummary, AuditType
from agent_auditor.services.audit_runner import AuditRunner
from agent_auditor.services.audit_store import AuditStore
from agent_auditor.services.report_generator import ReportGenerator

router = APIRouter(tags=["Audit"])


def get_audit_store(request: Request) -> AuditStore:
    return request.app.state.audit_store


def get_audit_runner(request: Request) -> AuditRunner:
    return request.app.state.audit_runner


def _run(audit_type: AuditType, body: AuditRequest, runner: AuditRunner, store: AuditStore) -> AuditResult:
    result = runner.run(audit_type, body.files.to_mapping())
    store.save(result)
    logger.info(
        f"Completed {audit_type.value} audit {result.id}: "
        f"score={result.score} grade={result.grade} certifiable={result.certifiable}"
    )
    return result


@router.post("/security", response_model=AuditResult)
async def security_audit(
    body: AuditRequest,
    runner: AuditRunner = Depends(get_audit_runner),
    store: AuditStore = Depends(get_audit_store),
):
    """Run the security catalog over the submitted documents."""
    return _run(AuditType.SECURITY, body, runner, store)


@router.post("/gdpr", response_model=AuditResult)
async def gdpr_audit(
    body: AuditRequest,
    runner: AuditRunner = Depends(get_audit_runner),
    store: AuditStore = Depends(get_audit_store),
):
    """Run the GDPR catalog over the submitted documents."""
    return _run(AuditType.GDPR, body, runner, store)


@router.get("", response_model=AuditHistory)
async def list_audits(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    store: AuditStore = Depends(get_audit_store),
):
    """Audit history, newest first."""
    audits, total = store.history(limit=limit, offset=offset)
    return AuditHistory(
        audits=[
            AuditSummary(
                id=a.id,
                type=a.type,
                timestamp=a.timestamp,
                score=a.score,
                grade=a.grade,
                certifiable=a.certifiable,
            )
            for a in audits
        ],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{audit_id}", response_model=AuditResult)
async def get_audit(audit_id: str, store: AuditStore = Depends(get_audit_store)):
    """Get a stored audit result."""
    result = store.get(audit_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Audit not found")
    return result


@router.get("/{audit_id}/report", response_class=HTMLResponse)
async def get_audit_report(audit_id: str, store: AuditStore = Depends(get_audit_store)):
    """Get the audit report as HTML."""
    result = store.get(audit_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Audit not found")

    generator = ReportGenerator()
    return HTMLResponse(content=generator.generate(result))
