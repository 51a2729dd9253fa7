"""
Submitted documents - the named text slots an audit runs over.

A slot is "supplied" when the caller sent non-empty text for it. Rules ask
`has(slot)` to decide applicability and read text through the join views,
which skip unsupplied slots and keep a fixed slot order.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Slot(str, Enum):
    """Named document slots, valued by their wire names."""
    SOUL = "SOUL.md"       # persona definition
    AGENTS = "AGENTS.md"   # agent orchestration definition
    TOOLS = "TOOLS.md"     # tool manifest
    CONFIG = "config"      # runtime configuration
    MEMORY = "memory"      # memory / log excerpt


# Concatenation order for every joined view
SLOT_ORDER = (Slot.SOUL, Slot.AGENTS, Slot.TOOLS, Slot.CONFIG, Slot.MEMORY)

DEFINITION_SLOTS = (Slot.SOUL, Slot.AGENTS, Slot.TOOLS, Slot.CONFIG)


@dataclass(frozen=True)
class DocumentSet:
    """Immutable set of supplied documents."""
    texts: Mapping[Slot, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, files: Optional[Mapping[str, Optional[str]]]) -> "DocumentSet":
        """Build from a wire mapping (slot name -> optional text).

        Unknown keys, None and empty strings are dropped.
        """
        texts = {}
        for slot in SLOT_ORDER:
            value = (files or {}).get(slot.value)
            if isinstance(value, str) and value:
                texts[slot] = value
        return cls(texts=MappingProxyType(texts))

    def has(self, slot: Slot) -> bool:
        """Was the slot supplied at all?"""
        return slot in self.texts

    def text(self, slot: Slot) -> str:
        return self.texts.get(slot, "")

    def join(self, *slots: Slot) -> str:
        """Supplied texts among `slots`, in slot order, newline-joined."""
        wanted = set(slots)
        return "\n".join(self.texts[s] for s in SLOT_ORDER if s in wanted and s in self.texts)

    @property
    def supplied(self) -> tuple[Slot, ...]:
        return tuple(s for s in SLOT_ORDER if s in self.texts)

    @property
    def all_content(self) -> str:
        return self.join(*SLOT_ORDER)

    @property
    def definition_content(self) -> str:
        """Everything except the memory excerpt."""
        return self.join(*DEFINITION_SLOTS)
