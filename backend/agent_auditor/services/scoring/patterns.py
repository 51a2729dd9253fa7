"""
Shared detection patterns.

Personal-data shapes, the placeholder filter and the guard phrases that
several rules in both catalogs rely on.
"""

import re
from typing import Iterable, Optional, Pattern

# --- Personal data shapes ---

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

PHONE_RE = re.compile(r"(?<!\d)(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)")

# Spanish national id: 8 digits + uppercase control letter
DNI_RE = re.compile(r"\b\d{8}[A-Z]\b")

# Words that make a nearby email/phone look like real contact data
CONTACT_CONTEXT_RE = re.compile(
    r"\b(?:contact(?:o|ar)?|e-?mail|mail|correo|phone|tel[eé]fono|tel|mobile|m[oó]vil"
    r"|call|llamar|customers?|clientes?|clients?|reach)\b",
    re.IGNORECASE,
)

# --- Placeholder filter ---

# Documentation / example values that are not real secrets
PLACEHOLDER_RE = re.compile(
    r"example|sample|dummy|placeholder|your[_-]|changeme|change[_-]me|redacted"
    r"|<[^>]*>|\[[^\]]*\]|x{4,}|\*{3,}|\$\{|\{\{|process\.env|os\.environ|getenv",
    re.IGNORECASE,
)

# --- Guard phrases ---

CONFIRMATION_RE = re.compile(
    r"\b(?:ask|request|require[sd]?|get|obtain|wait\s+for|needs?)\b.{0,30}?"
    r"\b(?:confirmation|approval|permission|consent)\b"
    r"|\bconfirm(?:s|ed)?\b.{0,30}?\b(?:with|before|first)\b"
    r"|\bexplicit(?:ly)?\b.{0,20}?\b(?:confirm\w*|approv\w*|consent|permission)\b"
    r"|\bhuman[- ]in[- ]the[- ]loop\b"
    r"|\bpedir\s+(?:confirmaci[oó]n|permiso|aprobaci[oó]n)"
    r"|\bconfirmaci[oó]n\s+expl[ií]cita"
    r"|\bpreguntar\s+(?:al\s+usuario\s+)?antes\b",
    re.IGNORECASE,
)

CONSENT_RE = re.compile(
    r"consent|consentimiento|permission|permiso|authori[sz]e|autoriza",
    re.IGNORECASE,
)

LOCAL_HOSTS = r"(?!localhost|127\.0\.0\.1|0\.0\.0\.0|\[::1\])"

# Transfer verb and third-party token within 40 chars, either order
THIRD_PARTY_TRANSFER_PATTERNS = [
    re.compile(
        r"\b(?:share|transfer|send|provide)\b.{0,40}?(?:third.?part|external|partner|vendor|proveedor|tercero)",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:third.?part|external|partner|vendor|proveedor|tercero).{0,40}?\b(?:share|transfer|send|provide|access)",
        re.IGNORECASE,
    ),
]


def is_placeholder(value: str) -> bool:
    """True when a matched value reads like documentation, not a secret."""
    return bool(PLACEHOLDER_RE.search(value))


def find_first(patterns: Iterable[Pattern], text: str) -> Optional[re.Match]:
    """First match of the first pattern that matches."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None


def has_personal_data(text: str, include_dni: bool = False) -> bool:
    """Unconditional email/phone (and optionally DNI) match."""
    if EMAIL_RE.search(text) or PHONE_RE.search(text):
        return True
    return include_dni and bool(DNI_RE.search(text))


def has_contact_data(line: str) -> bool:
    """Email or phone on a line that also carries contact intent.

    The matched token itself is cut out before looking for intent, so an
    address like user@mail.example.org does not supply its own context.
    """
    for pattern in (EMAIL_RE, PHONE_RE):
        for match in pattern.finditer(line):
            rest = line[:match.start()] + " " + line[match.end():]
            if CONTACT_CONTEXT_RE.search(rest):
                return True
    return False
