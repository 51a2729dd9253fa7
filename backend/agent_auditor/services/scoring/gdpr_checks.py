"""
GDPR Catalog - 8 ordered rules.

GDPR-01 and GDPR-02 read the memory excerpt and report N/A without it.
The others read the agent definition (every slot except memory), so a
submission carrying only memory runs them over an empty string.
"""

import re

from agent_auditor.services.documents import DocumentSet, Slot
from agent_auditor.services.scoring.catalog import Rule, build_catalog
from agent_auditor.services.scoring.models import Check, Severity
from agent_auditor.services.scoring.patterns import (
    CONSENT_RE,
    THIRD_PARTY_TRANSFER_PATTERNS,
    find_first,
    has_personal_data,
)

RETENTION_POLICY_RE = re.compile(r"retenci[oó]n|retention|\bttl\b|expir", re.IGNORECASE)

CONVERSATION_LOG_PATTERNS = [
    re.compile(r"\btranscripts?\b", re.IGNORECASE),
    re.compile(r"\bfull_history\b", re.IGNORECASE),
    re.compile(r"\bsave_all_messages\b", re.IGNORECASE),
    re.compile(r"\blog_conversations?\b", re.IGNORECASE),
    re.compile(r"\bstore_all_chats?\b", re.IGNORECASE),
    re.compile(r"\brecord\s+(?:all|every)\s+conversations?\b", re.IGNORECASE),
]

USER_PASSWORD_PATTERNS = [
    re.compile(r"\buser_password\s*[:=]", re.IGNORECASE),
    re.compile(r"\buser_credentials?\s*[:=]", re.IGNORECASE),
    re.compile(r"\bplaintext_password\b", re.IGNORECASE),
    re.compile(r"\bstore.{0,20}password", re.IGNORECASE),
    re.compile(r"\bguardar.{0,20}contraseña", re.IGNORECASE),
]

PRIVACY_NOTICE_RE = re.compile(
    r"privacy.?policy|pol[ií]tica.?de.?privacidad|aviso.?legal|legal.?notice"
    r"|data.?protection|protecci[oó]n.?de.?datos",
    re.IGNORECASE,
)

MINORS_RE = re.compile(
    r"\bchildren\b"
    r"|\bchild\b(?!\s+(?:process(?:es)?|elements?|nodes?|agents?|tasks?|threads?|components?|class(?:es)?|spans?|rows?)\b)"
    r"|\bminors\b|\bminor\s+(?:users?|data|consent)\b"
    r"|\bunder[- ]?(?:13|14|16|18)\b"
    r"|\bteen(?:ager)?s?\b|\badolescen\w*"
    r"|\bmenores\b|\bmenor\s+de\s+edad\b|\bni[ñn][oa]s?\b",
    re.IGNORECASE,
)

LEGAL_BASIS_RE = re.compile(
    r"legal.?basis|base.?legal|legitimate.?interest|inter[eé]s.?leg[ií]timo"
    r"|consent.?basis|contractual.?obligation|obligaci[oó]n.?contractual",
    re.IGNORECASE,
)


def check_retention_policy(rule: Rule, docs: DocumentSet) -> Check:
    memory = docs.text(Slot.MEMORY)
    if has_personal_data(memory) and not RETENTION_POLICY_RE.search(memory):
        return rule.failed(
            "Personal data found in memory without a data retention policy",
            "Add a data retention policy specifying how long personal data is kept and when it is deleted.",
        )
    return rule.passed("No personal data without retention policy detected in memory")


def check_memory_personal_data(rule: Rule, docs: DocumentSet) -> Check:
    if has_personal_data(docs.text(Slot.MEMORY), include_dni=True):
        return rule.failed(
            "Personal data (email, phone, or DNI) detected in memory files",
            "Remove all personal data from memory files. Use anonymized identifiers instead.",
        )
    return rule.passed("No personal data detected in memory files")


def check_third_party_transfer(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.definition_content
    if find_first(THIRD_PARTY_TRANSFER_PATTERNS, content) and not CONSENT_RE.search(content):
        return rule.failed(
            "Data transfer to third parties mentioned without consent reference",
            "Add explicit user consent requirements before any data sharing with third parties.",
        )
    return rule.passed("No unconsented third-party data transfers detected")


def check_conversation_logging(rule: Rule, docs: DocumentSet) -> Check:
    if find_first(CONVERSATION_LOG_PATTERNS, docs.definition_content):
        return rule.failed(
            "Full conversation logging detected - may violate data minimization principle",
            "Avoid logging full conversations. Log only necessary metadata and anonymized summaries.",
        )
    return rule.passed("No full conversation logging patterns detected")


def check_user_passwords(rule: Rule, docs: DocumentSet) -> Check:
    if find_first(USER_PASSWORD_PATTERNS, docs.definition_content):
        return rule.failed(
            "End-user passwords or credentials found in agent files",
            "Never store end-user passwords in agent files. Use secure authentication providers and hashed storage.",
        )
    return rule.passed("No end-user passwords or credentials detected in files")


def check_privacy_notice(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.definition_content
    if not content.strip():
        return rule.passed("No agent definition content supplied to reference a privacy policy")
    if not PRIVACY_NOTICE_RE.search(content):
        return rule.failed(
            "No reference to a privacy policy or legal notice found",
            "Add a reference to a privacy policy or legal notice in the agent configuration.",
        )
    return rule.passed("Privacy policy or legal notice reference found")


def check_minors(rule: Rule, docs: DocumentSet) -> Check:
    if MINORS_RE.search(docs.definition_content):
        return rule.failed(
            "References to minors or children data detected - requires special GDPR protections",
            "Implement age verification and parental consent mechanisms. Apply enhanced data protection for minors.",
        )
    return rule.passed("No references to minor data access detected")


def check_legal_basis(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.definition_content
    if not content.strip():
        return rule.passed("No agent definition content supplied to document a legal basis")
    if not LEGAL_BASIS_RE.search(content):
        return rule.failed(
            "No documented legal basis for data processing found",
            "Document the legal basis for data processing (consent, legitimate interest, contractual obligation, etc.).",
        )
    return rule.passed("Legal basis for data processing is documented")


GDPR_CATALOG = build_catalog(
    "gdpr",
    [
        Rule("GDPR-01", Severity.CRITICAL, check_retention_policy, (Slot.MEMORY,)),
        Rule("GDPR-02", Severity.CRITICAL, check_memory_personal_data, (Slot.MEMORY,)),
        Rule("GDPR-03", Severity.HIGH, check_third_party_transfer),
        Rule("GDPR-04", Severity.HIGH, check_conversation_logging),
        Rule("GDPR-05", Severity.HIGH, check_user_passwords),
        Rule("GDPR-06", Severity.MEDIUM, check_privacy_notice),
        Rule("GDPR-07", Severity.MEDIUM, check_minors),
        Rule("GDPR-08", Severity.LOW, check_legal_basis),
    ],
    all_passed_message="All GDPR checks passed. Your agent configuration is GDPR compliant.",
)
