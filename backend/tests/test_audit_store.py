# tests/test_audit_store.py
from agent_auditor.schemas.audit_result import AuditType
from agent_auditor.services.audit_runner import AuditRunner
from agent_auditor.services.audit_store import AuditStore


def make_result(audit_id):
    return AuditRunner().run(AuditType.SECURITY, {}, audit_id=audit_id)


def test_save_and_get():
    store = AuditStore()
    store.save(make_result("a1"))
    assert store.get("a1").id == "a1"
    assert store.get("missing") is None


def test_history_newest_first_and_paged():
    store = AuditStore()
    for i in range(5):
        store.save(make_result(f"a{i}"))

    items, total = store.history(limit=2)
    assert total == 5
    assert [r.id for r in items] == ["a4", "a3"]

    items, _ = store.history(limit=2, offset=4)
    assert [r.id for r in items] == ["a0"]


def test_evicts_oldest_when_full():
    store = AuditStore(max_entries=2)
    for i in range(3):
        store.save(make_result(f"a{i}"))
    assert store.get("a0") is None
    assert store.history(limit=10)[1] == 2


def test_clear():
    store = AuditStore()
    store.save(make_result("a1"))
    store.clear()
    assert store.history() == ([], 0)
