# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from agent_auditor.config import settings
from agent_auditor.main import app
from agent_auditor.services.audit_store import AuditStore

CLEAN_FILES = {
    "SOUL.md": "# Agent Soul\nThis agent helps users complete tasks efficiently and ethically.",
    "AGENTS.md": "# Agents\nMain orchestrator agent handles user requests.",
    "TOOLS.md": "# Tools\nSearch tool, calculator tool, file reader tool.",
    "config": "dmPolicy: strict\nallowFrom: trusted-sources\nsessionId: enabled",
}


@pytest.fixture
def client():
    app.state.audit_store = AuditStore(max_entries=50)
    return TestClient(app)


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["app"] == settings.APP_NAME


def test_health(client):
    assert client.get("/api/v1/health").json() == {"status": "ok"}


def test_detailed_health_lists_catalogs(client):
    data = client.get("/api/v1/health/detailed").json()
    assert data["scoring_version"] == "2.0"
    security = data["catalogs"]["security"]
    assert security["rules"] == 16
    assert security["rule_ids"][0] == "SEC-01"
    assert security["rule_ids"][-1] == "ETH-04"
    assert security["policy_blockers"] == ["ETH-02"]
    assert data["catalogs"]["gdpr"] == {
        "rules": 8,
        "rule_ids": [f"GDPR-0{i}" for i in range(1, 9)],
        "policy_blockers": [],
    }


def test_security_audit_clean(client):
    resp = client.post("/api/v1/audit/security", json={"files": CLEAN_FILES})
    assert resp.status_code == 200
    data = resp.json()
    assert data["type"] == "security"
    assert data["score"] == 100
    assert data["grade"] == "A"
    assert data["certifiable"] is True
    assert len(data["checks"]) == 16
    assert {c["status"] for c in data["checks"]} == {"PASS"}


def test_security_audit_wire_format(client):
    files = dict(CLEAN_FILES, config="sessionId: enabled")
    data = client.post("/api/v1/audit/security", json={"files": files}).json()
    sec02 = data["checks"][1]
    assert sec02 == {
        "id": "SEC-02",
        "severity": "HIGH",
        "status": "FAIL",
        "message": "dmPolicy is not configured in the agent config",
        "fix": "Add a dmPolicy configuration to restrict direct message handling and define allowed communication patterns.",
    }
    assert data["checks"][0]["fix"] is None
    assert data["score"] == 76
    assert data["blockers"] == ["SEC-02", "SEC-03"]


def test_not_applicable_on_the_wire(client):
    data = client.post("/api/v1/audit/gdpr", json={"files": {"SOUL.md": "Privacy policy. Legal basis: consent."}}).json()
    assert data["checks"][0]["status"] == "N/A"
    assert data["checks"][0]["fix"] is None
    assert data["score"] == 100


def test_empty_body_runs_empty_audit(client):
    resp = client.post("/api/v1/audit/security", json={})
    assert resp.status_code == 200
    assert resp.json()["score"] == 100


def test_non_string_slot_rejected(client):
    resp = client.post("/api/v1/audit/security", json={"files": {"SOUL.md": 123}})
    assert resp.status_code == 422


def test_oversized_slot_rejected(client):
    files = {"memory": "a" * (settings.MAX_DOCUMENT_CHARS + 1)}
    resp = client.post("/api/v1/audit/gdpr", json={"files": files})
    assert resp.status_code == 422


def test_get_stored_audit(client):
    created = client.post("/api/v1/audit/gdpr", json={"files": {"memory": "Contact: john.doe@example.com"}}).json()
    resp = client.get(f"/api/v1/audit/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


def test_get_unknown_audit(client):
    resp = client.get("/api/v1/audit/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Audit not found"


def test_report_html(client):
    created = client.post("/api/v1/audit/security", json={"files": CLEAN_FILES}).json()
    resp = client.get(f"/api/v1/audit/{created['id']}/report")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert created["id"] in resp.text


def test_report_unknown_audit(client):
    assert client.get("/api/v1/audit/nope/report").status_code == 404


def test_history(client):
    ids = [
        client.post("/api/v1/audit/security", json={"files": CLEAN_FILES}).json()["id"],
        client.post("/api/v1/audit/gdpr", json={"files": {}}).json()["id"],
    ]
    data = client.get("/api/v1/audit").json()
    assert data["total"] == 2
    assert [a["id"] for a in data["audits"]] == list(reversed(ids))
    assert data["audits"][0]["type"] == "gdpr"

    paged = client.get("/api/v1/audit", params={"limit": 1, "offset": 1}).json()
    assert [a["id"] for a in paged["audits"]] == [ids[0]]


def test_history_limit_validated(client):
    assert client.get("/api/v1/audit", params={"limit": 0}).status_code == 422
