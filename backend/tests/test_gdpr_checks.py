# tests/test_gdpr_checks.py
from agent_auditor.services.documents import DocumentSet
from agent_auditor.services.scoring.engine import ScoringEngine
from agent_auditor.services.scoring.gdpr_checks import GDPR_CATALOG
from agent_auditor.services.scoring.models import Severity, Status

COMPLIANT_SOUL = "# Soul\nHelpful assistant. See our privacy policy. Legal basis: legitimate interest."


def evaluate(files):
    return GDPR_CATALOG.evaluate(DocumentSet.from_mapping(files))


def status_of(files, rule_id):
    return next(c for c in evaluate(files) if c.id == rule_id).status


def test_catalog_ids_and_severities():
    checks = evaluate({"SOUL.md": COMPLIANT_SOUL})
    assert [c.id for c in checks] == [f"GDPR-0{i}" for i in range(1, 9)]
    assert [c.severity for c in checks] == [
        Severity.CRITICAL, Severity.CRITICAL,
        Severity.HIGH, Severity.HIGH, Severity.HIGH,
        Severity.MEDIUM, Severity.MEDIUM,
        Severity.LOW,
    ]
    assert GDPR_CATALOG.policy_blockers == frozenset()


def test_memory_with_email_and_no_retention():
    files = {"SOUL.md": "# Soul", "memory": "Contact: john.doe@example.com for support requests."}
    assert status_of(files, "GDPR-01") == Status.FAIL
    assert status_of(files, "GDPR-02") == Status.FAIL


def test_memory_only_submission():
    checks = evaluate({"memory": "Contact: john.doe@example.com"})
    statuses = {c.id: c.status for c in checks}
    assert statuses["GDPR-01"] == Status.FAIL
    assert statuses["GDPR-02"] == Status.FAIL
    for rule_id in ("GDPR-03", "GDPR-04", "GDPR-05", "GDPR-06", "GDPR-07", "GDPR-08"):
        assert statuses[rule_id] == Status.PASS

    result = ScoringEngine().score(checks, GDPR_CATALOG.policy_blockers)
    assert result.score == 50
    assert result.grade == "D"
    assert result.blockers == ["GDPR-01", "GDPR-02"]
    assert not result.certifiable


def test_no_memory_marks_memory_rules_not_applicable():
    checks = evaluate({"SOUL.md": COMPLIANT_SOUL})
    statuses = {c.id: c.status for c in checks}
    assert statuses["GDPR-01"] == Status.NOT_APPLICABLE
    assert statuses["GDPR-02"] == Status.NOT_APPLICABLE
    assert all(status == Status.PASS for rule_id, status in statuses.items() if rule_id not in ("GDPR-01", "GDPR-02"))
    assert ScoringEngine().score(checks).score == 100


def test_memory_rules_ignore_definition_files():
    assert status_of({"SOUL.md": "Contact: john.doe@example.com"}, "GDPR-02") == Status.NOT_APPLICABLE


def test_retention_policy_in_memory():
    files = {"memory": "Contact: john.doe@example.com\nRetention: 30 days"}
    assert status_of(files, "GDPR-01") == Status.PASS
    assert status_of(files, "GDPR-02") == Status.FAIL


def test_dni_only_trips_memory_personal_data():
    files = {"memory": "User DNI: 12345678A registered"}
    assert status_of(files, "GDPR-02") == Status.FAIL
    assert status_of(files, "GDPR-01") == Status.PASS


def test_phone_in_memory():
    assert status_of({"memory": "Callback number (555) 123-4567"}, "GDPR-02") == Status.FAIL


def test_clean_memory_passes():
    files = {"memory": "User prefers concise answers in Spanish."}
    assert status_of(files, "GDPR-01") == Status.PASS
    assert status_of(files, "GDPR-02") == Status.PASS


def test_third_party_transfer_without_consent():
    files = {"SOUL.md": "Share customer data with third-party analytics providers."}
    assert status_of(files, "GDPR-03") == Status.FAIL


def test_third_party_transfer_with_consent():
    files = {"SOUL.md": "Share customer data with third-party analytics providers only after the user gives consent."}
    assert status_of(files, "GDPR-03") == Status.PASS


def test_conversation_logging():
    assert status_of({"AGENTS.md": "Keep transcripts of every session."}, "GDPR-04") == Status.FAIL
    assert status_of({"config": "full_history: true"}, "GDPR-04") == Status.FAIL
    assert status_of({"config": "save_all_messages: yes"}, "GDPR-04") == Status.FAIL


def test_conversation_logging_ignores_memory():
    assert status_of({"memory": "transcript of yesterday"}, "GDPR-04") == Status.PASS


def test_user_passwords():
    assert status_of({"config": "user_password: mysecretpass123"}, "GDPR-05") == Status.FAIL
    assert status_of({"SOUL.md": "Store the user's password for later logins."}, "GDPR-05") == Status.FAIL
    assert status_of({"SOUL.md": COMPLIANT_SOUL}, "GDPR-05") == Status.PASS


def test_privacy_notice():
    assert status_of({"SOUL.md": "Helpful assistant"}, "GDPR-06") == Status.FAIL
    assert status_of({"SOUL.md": "Read our Privacy Policy at /privacy"}, "GDPR-06") == Status.PASS
    assert status_of({"SOUL.md": "Consulta la política de privacidad"}, "GDPR-06") == Status.PASS


def test_minors():
    assert status_of({"SOUL.md": "Helps children under 13 with homework."}, "GDPR-07") == Status.FAIL
    assert status_of({"SOUL.md": "Atiende a menores de edad"}, "GDPR-07") == Status.FAIL


def test_child_process_is_not_minors():
    assert status_of({"TOOLS.md": "Spawns a child process per request"}, "GDPR-07") == Status.PASS


def test_legal_basis():
    assert status_of({"SOUL.md": "Helpful assistant"}, "GDPR-08") == Status.FAIL
    assert status_of({"SOUL.md": "Legal basis: consent"}, "GDPR-08") == Status.PASS


def test_fails_carry_fix():
    for check in evaluate({"SOUL.md": "Helpful assistant"}):
        if check.status == Status.FAIL:
            assert check.fix
        else:
            assert check.fix is None


def test_empty_submission():
    checks = evaluate({})
    statuses = {c.id: c.status for c in checks}
    assert statuses["GDPR-01"] == Status.NOT_APPLICABLE
    assert statuses["GDPR-02"] == Status.NOT_APPLICABLE
    assert [s for s in statuses.values() if s not in (Status.PASS, Status.NOT_APPLICABLE)] == []
    assert ScoringEngine().score(checks).score == 100
