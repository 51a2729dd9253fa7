# tests/test_documents.py
from agent_auditor.services.documents import DocumentSet, Slot


def test_from_mapping_drops_absent_and_empty_slots():
    docs = DocumentSet.from_mapping({"SOUL.md": "soul", "AGENTS.md": "", "config": None, "README.md": "ignored"})
    assert docs.supplied == (Slot.SOUL,)
    assert docs.has(Slot.SOUL)
    assert not docs.has(Slot.AGENTS)
    assert not docs.has(Slot.CONFIG)


def test_from_mapping_accepts_none():
    docs = DocumentSet.from_mapping(None)
    assert docs.supplied == ()
    assert docs.all_content == ""


def test_join_uses_fixed_slot_order():
    docs = DocumentSet.from_mapping({"config": "c", "memory": "m", "SOUL.md": "s", "TOOLS.md": "t"})
    assert docs.all_content == "s\nt\nc\nm"
    assert docs.join(Slot.CONFIG, Slot.SOUL) == "s\nc"


def test_definition_content_excludes_memory():
    docs = DocumentSet.from_mapping({"AGENTS.md": "a", "memory": "m"})
    assert docs.definition_content == "a"
    assert docs.text(Slot.MEMORY) == "m"


def test_text_of_missing_slot_is_empty():
    docs = DocumentSet.from_mapping({"memory": "m"})
    assert docs.text(Slot.CONFIG) == ""
    assert docs.join(Slot.SOUL, Slot.AGENTS) == ""


def test_whitespace_text_counts_as_supplied():
    docs = DocumentSet.from_mapping({"config": "  "})
    assert docs.has(Slot.CONFIG)
