"""
Security Catalog - 16 ordered rules over agent documents.

Rules:
- SEC-01..SEC-12: secrets, config presence, commands, personal data,
  exfiltration, tool and channel exposure, retention
- ETH-01..ETH-04: guarded actions and persona honesty

ETH-02 (irreversible action without confirmation) blocks certification by
policy, whatever its score impact.
"""

import re
from typing import Optional

from agent_auditor.services.documents import DocumentSet, Slot
from agent_auditor.services.scoring.catalog import Rule, build_catalog
from agent_auditor.services.scoring.models import Check, Severity
from agent_auditor.services.scoring.patterns import (
    CONFIRMATION_RE,
    CONSENT_RE,
    EMAIL_RE,
    LOCAL_HOSTS,
    THIRD_PARTY_TRANSFER_PATTERNS,
    find_first,
    has_contact_data,
    is_placeholder,
)

# === SEC-01: plaintext secrets ===

TOKEN_PATTERNS = [
    re.compile(r"\bgh[pousr]_[A-Za-z0-9]{36,}"),                 # GitHub
    re.compile(r"\bgithub_pat_[A-Za-z0-9_]{22,}"),                # GitHub fine-grained
    re.compile(r"\bsk-(?:ant-|proj-)?[A-Za-z0-9_-]{32,}"),        # OpenAI / Anthropic
    re.compile(r"\bAKIA[0-9A-Z]{16}\b"),                          # AWS access key id
    re.compile(r"\bxox[abposr]-[A-Za-z0-9-]{10,}"),               # Slack
    re.compile(r"\bAIza[0-9A-Za-z_-]{35}"),                       # Google
    re.compile(r"\bglpat-[A-Za-z0-9_-]{20,}"),                    # GitLab
    re.compile(r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----"),
    re.compile(r"\bBearer\s+[A-Za-z0-9._~+/=-]{20,}", re.IGNORECASE),
]

SECRET_ASSIGNMENT_RE = re.compile(
    r"\b(?:[A-Za-z0-9]+[_.-])*"
    r"(?:api[_-]?key|access[_-]?key|secret[_-]?key|auth[_-]?token|access[_-]?token|api[_-]?token"
    r"|apikey|accesskey|authtoken|accesstoken|key|token|secret)"
    r"[\"']?\s*[:=]\s*[\"']?(?P<value>[^\s\"',;#]+)",
    re.IGNORECASE,
)


def _is_secret_value(value: str) -> bool:
    if len(value) < 8 or is_placeholder(value):
        return False
    return any(ch.isdigit() for ch in value) or len(value) >= 20


def _line_has_secret(line: str) -> bool:
    for pattern in TOKEN_PATTERNS:
        for match in pattern.finditer(line):
            if not is_placeholder(match.group(0)):
                return True
    return any(_is_secret_value(m.group("value")) for m in SECRET_ASSIGNMENT_RE.finditer(line))


def check_plaintext_secrets(rule: Rule, docs: DocumentSet) -> Check:
    for line in docs.all_content.splitlines():
        if _line_has_secret(line):
            return rule.failed(
                "API key or token detected in plaintext within agent files",
                "Remove all hardcoded API keys and tokens. Use environment variables or a secrets manager instead.",
            )
    return rule.passed("No API keys or tokens detected in plaintext")


# === SEC-02 / SEC-03 / SEC-08: declarative config presence ===

DM_POLICY_RE = re.compile(r"dm[_-]?policy", re.IGNORECASE)
ALLOW_FROM_RE = re.compile(r"allow[_-]?from", re.IGNORECASE)
SESSION_ISOLATION_RE = re.compile(r"session[_-]?(?:id|isolation|scope)", re.IGNORECASE)


def check_dm_policy(rule: Rule, docs: DocumentSet) -> Check:
    if not DM_POLICY_RE.search(docs.text(Slot.CONFIG)):
        return rule.failed(
            "dmPolicy is not configured in the agent config",
            "Add a dmPolicy configuration to restrict direct message handling and define allowed communication patterns.",
        )
    return rule.passed("dmPolicy is configured")


def check_allow_from(rule: Rule, docs: DocumentSet) -> Check:
    if not ALLOW_FROM_RE.search(docs.text(Slot.CONFIG)):
        return rule.failed(
            "allowFrom is not configured in the agent config",
            "Add an allowFrom configuration to whitelist trusted sources and prevent unauthorized access.",
        )
    return rule.passed("allowFrom is configured")


def check_session_isolation(rule: Rule, docs: DocumentSet) -> Check:
    if not SESSION_ISOLATION_RE.search(docs.text(Slot.CONFIG)):
        return rule.failed(
            "Session isolation configuration not found in config",
            "Add sessionId or session_id configuration to ensure proper session isolation between agent interactions.",
        )
    return rule.passed("Session isolation is configured")


# === SEC-04: credentials in persona / orchestration ===

CREDENTIAL_KEYWORD = (
    r"\b(?:passwords?|passwd|secrets?|credentials?|api[_-]?keys?|private[_-]?keys?|contraseñas?)\b"
)

CREDENTIAL_KEYWORD_RE = re.compile(CREDENTIAL_KEYWORD, re.IGNORECASE)

CREDENTIAL_ASSIGNMENT_RE = re.compile(
    CREDENTIAL_KEYWORD + r"[\"']?\s*[:=]\s*[\"']?(?P<value>[^\s\"',;]{4,})",
    re.IGNORECASE,
)

# "the password for the service is hunter22"
CREDENTIAL_PROSE_RE = re.compile(
    CREDENTIAL_KEYWORD + r"[^:=\n.]{0,25}?\b(?:is|are|es)\s+[\"']?(?P<value>[^\s\"',;.]{4,})",
    re.IGNORECASE,
)

# Prose continuations that describe handling rather than disclose a value
PROSE_WORDS = {
    "always", "available", "confidential", "encrypted", "expired", "from", "handled",
    "hashed", "invalid", "kept", "managed", "mandatory", "missing", "needed", "never",
    "only", "optional", "private", "provided", "required", "rotated", "secret",
    "sensitive", "stored", "their", "your",
}


def _is_credential_value(value: str) -> bool:
    return value.lower() not in PROSE_WORDS and not is_placeholder(value)


def _discloses_credential(line: str) -> bool:
    # "Password: required for every login" is a heading, not a value
    for match in CREDENTIAL_ASSIGNMENT_RE.finditer(line):
        value = match.group("value")
        if _is_credential_value(value) and _is_secret_value(value):
            return True
    return any(_is_credential_value(m.group("value")) for m in CREDENTIAL_PROSE_RE.finditer(line))


def check_credential_references(rule: Rule, docs: DocumentSet) -> Check:
    lines = docs.join(Slot.SOUL, Slot.AGENTS).splitlines()
    if any(_discloses_credential(line) for line in lines):
        return rule.failed(
            "Credential value found in SOUL.md or AGENTS.md",
            "Remove all passwords, secrets, and credentials from agent definition files. Reference them from a secrets manager instead.",
        )
    if any(CREDENTIAL_KEYWORD_RE.search(line) for line in lines):
        return rule.warned(
            "Credential keywords mentioned in SOUL.md or AGENTS.md without a value",
            "Make sure agent definition files only describe credential handling and never embed the credentials themselves.",
        )
    return rule.passed("No credential keywords detected in agent definition files")


# === SEC-05: destructive commands ===

DESTRUCTIVE_PATTERNS = [
    re.compile(r"\brm\s+-(?:[a-z]*r[a-z]*f|[a-z]*f[a-z]*r)[a-z]*\b", re.IGNORECASE),
    re.compile(r"\bdrop\s+(?:table|database|schema)\b", re.IGNORECASE),
    re.compile(r"\btruncate\s+table\b", re.IGNORECASE),
    re.compile(r"\bformat\s+[a-z]:", re.IGNORECASE),
    re.compile(r"\bmkfs\b", re.IGNORECASE),
]


def check_destructive_commands(rule: Rule, docs: DocumentSet) -> Check:
    if find_first(DESTRUCTIVE_PATTERNS, docs.all_content):
        return rule.failed(
            "Destructive command detected in agent files",
            "Remove all destructive commands (rm -rf, DROP TABLE, format, mkfs) from agent configuration.",
        )
    return rule.passed("No destructive commands detected")


# === SEC-06: personal data (context-gated) ===

def check_personal_data(rule: Rule, docs: DocumentSet) -> Check:
    if any(has_contact_data(line) for line in docs.all_content.splitlines()):
        return rule.failed(
            "Potential personal data (email or phone number) detected in agent files",
            "Remove personal data from agent files. Use anonymized identifiers instead of real contact information.",
        )
    return rule.passed("No personal data patterns detected in agent files")


# === SEC-07: exfiltration intent ===

EXFILTRATION_PATTERNS = [
    # verb near an external URL
    re.compile(
        r"\b(?:send|upload|export|share|forward|post|put|subir|enviar|exportar|compartir)\b"
        r".{0,60}?https?://" + LOCAL_HOSTS,
        re.IGNORECASE,
    ),
    # verb near an email address
    re.compile(
        r"\b(?:send|email|mail|forward|share|enviar|reenviar)\b.{0,60}?" + EMAIL_RE.pattern,
        re.IGNORECASE,
    ),
    # raw HTTP call to an external host
    re.compile(r"\b(?:POST|PUT|PATCH)\s+https?://" + LOCAL_HOSTS, re.IGNORECASE),
]


def check_exfiltration(rule: Rule, docs: DocumentSet) -> Check:
    if find_first(EXFILTRATION_PATTERNS, docs.all_content):
        return rule.failed(
            "Potential data exfiltration instruction detected (external URL or email target found)",
            "Review instructions that direct the agent to send or upload data to external endpoints.",
        )
    return rule.passed("No data exfiltration patterns detected")


# === SEC-09: privileged execution ===

PRIVILEGED_PATTERNS = [
    re.compile(r"\bsudo\s+\S", re.IGNORECASE),
    re.compile(r"\bchmod\s+(?:-R\s+)?0?777\b", re.IGNORECASE),
    re.compile(r"--privileged\b", re.IGNORECASE),
    re.compile(r"\b(?:curl|wget)\b[^|\n]*\|\s*(?:sudo\s+)?(?:ba|z)?sh\b", re.IGNORECASE),
    re.compile(r"\brun(?:s|ning)?\s+as\s+root\b", re.IGNORECASE),
]


def check_privileged_execution(rule: Rule, docs: DocumentSet) -> Check:
    if find_first(PRIVILEGED_PATTERNS, docs.all_content):
        return rule.failed(
            "Privileged or unsafe execution command detected in agent files",
            "Drop sudo, world-writable permissions, privileged containers and piped remote scripts. Run the agent with least privilege.",
        )
    return rule.passed("No privileged execution commands detected")


# === SEC-10: risky tool exposure ===

RISKY_TOOL_RE = re.compile(
    r"\b(?:shell|bash|terminal|exec|eval|subprocess|run_command|execute_command|os\.system"
    r"|code[_ ]interpreter|write_file|file_write)\b",
    re.IGNORECASE,
)

TOOL_GUARD_RE = re.compile(
    r"\bsandbox\w*|\ballow[- ]?list\w*|\bwhitelist\w*|\bread[- ]?only\b|\brestricted\b",
    re.IGNORECASE,
)


def check_tool_exposure(rule: Rule, docs: DocumentSet) -> Check:
    tools = docs.text(Slot.TOOLS)
    match = RISKY_TOOL_RE.search(tools)
    if match and not (TOOL_GUARD_RE.search(tools) or CONFIRMATION_RE.search(tools)):
        return rule.warned(
            f"High-risk tool exposed without sandbox or approval guard ('{match.group(0)}')",
            "Run command-execution and file-writing tools in a sandbox, restrict them with an allowlist, or require user confirmation before each call.",
        )
    return rule.passed("No unguarded high-risk tools exposed")


# === SEC-11: messaging channels ===

MESSAGING_CHANNEL_RE = re.compile(
    r"\b(?:whatsapp|telegram|slack|discord|imessage|sms|messenger)\b",
    re.IGNORECASE,
)

SENDER_GUARD_RE = re.compile(
    r"allow[_-]?from|allow[- ]?list|whitelist|\bpairing\b|dm[_-]?policy"
    r"|\b(?:approved|trusted)\s+(?:contacts|senders|users|numbers)\b",
    re.IGNORECASE,
)


def check_messaging_channels(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.all_content
    match = MESSAGING_CHANNEL_RE.search(content)
    if match and not SENDER_GUARD_RE.search(content):
        return rule.warned(
            f"Messaging channel '{match.group(0)}' enabled without a sender allowlist",
            "Restrict who can message the agent on external channels with allowFrom, pairing or an approved-sender list.",
        )
    return rule.passed("No unrestricted messaging channels detected")


# === SEC-12: broad retention ===

BROAD_RETENTION_RE = re.compile(
    r"\bremember\s+everything\b"
    r"|\b(?:store|save|keep|log|retain)\s+(?:all|every)\s+(?:conversations?|messages?|chats?|interactions?)\b"
    r"|\bforever\b|\bindefinitely\b"
    r"|\bnever\s+(?:forget|delete)\b"
    r"|\bguardar\s+todo\b|\bpara\s+siempre\b",
    re.IGNORECASE,
)

RETENTION_BOUND_RE = re.compile(
    r"retention|retenci[oó]n|\bttl\b|expir|\bdelete[ds]?\s+after\b|\bpurge\w*"
    r"|\b\d+\s*(?:days?|d[ií]as|weeks?|months?|meses)\b",
    re.IGNORECASE,
)


def check_broad_retention(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.all_content
    if BROAD_RETENTION_RE.search(content) and not RETENTION_BOUND_RE.search(content):
        return rule.warned(
            "Unbounded memory retention instructions found without a retention limit",
            "Define how long the agent keeps memories and conversations, and when they are deleted.",
        )
    return rule.passed("No unbounded retention instructions detected")


# === ETH-01: external communication ===

EXTERNAL_COMMUNICATION_RE = re.compile(
    r"\b(?:post|publish|tweet)\w*\b.{0,40}?\b(?:twitter|linkedin|facebook|instagram|social\s+media|publicly|blog)\b"
    r"|\bon\s+(?:my|the\s+user'?s|their|his|her)\s+behalf\b"
    r"|\b(?:email|contact|reply\s+to|respond\s+to|write\s+to)\s+(?:the\s+)?(?:customers|clients|leads|prospects|suppliers|vendors)\b"
    r"|\bsend\s+(?:an?\s+)?(?:emails?|messages?|newsletters?)\s+to\s+(?:all\s+)?(?:customers|clients|contacts|leads|subscribers)\b",
    re.IGNORECASE,
)


def check_external_communication(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.all_content
    if EXTERNAL_COMMUNICATION_RE.search(content) and not CONFIRMATION_RE.search(content):
        return rule.failed(
            "External communication on the user's behalf without a confirmation step",
            "Require explicit user confirmation before the agent posts, emails or messages anyone on the user's behalf.",
        )
    return rule.passed("External communication is absent or requires confirmation")


# === ETH-02: irreversible actions ===

IRREVERSIBLE_ACTION_RE = re.compile(
    r"\b(?:delete|remove|wipe|erase|purge|destroy)\b.{0,40}?"
    r"\b(?:files?|folders?|director(?:y|ies)|records?|accounts?|data|databases?|repos(?:itory|itories)?"
    r"|emails?|messages?|users?|backups?|branch(?:es)?)\b"
    r"|\b(?:make|send|process|execute|issue|authori[sz]e)\s+(?:a\s+|the\s+)?(?:payments?|refunds?|transfers?)\b"
    r"|\b(?:transfer|wire)\s+(?:money|funds)\b"
    r"|\bpurchases?\b|\bplace\s+orders?\b"
    r"|\bcancel\s+(?:the\s+)?(?:subscriptions?|orders?|accounts?|bookings?|reservations?)\b"
    r"|\bdeploy\w*\b.{0,20}?\bproduction\b"
    r"|\bforce[- ]push\b"
    r"|\b(?:borrar|eliminar)\b.{0,40}?\b(?:archivos?|datos|registros?|cuentas?|correos?)\b"
    r"|\b(?:realizar|hacer)\s+(?:un\s+)?pagos?\b",
    re.IGNORECASE,
)


# Clause opens with a prohibition: "Never delete user data", "- You must not purchase"
PROHIBITION_RE = re.compile(
    r"^\W*(?:(?:you|the\s+agent|it)\s+)?(?:(?:must|should|will|shall)\s+)?"
    r"(?:never|not|do\s+not|don't|does\s+not|doesn't|cannot|can't|no|nunca|jam[aá]s)\b",
    re.IGNORECASE,
)


def _unprohibited_action(content: str) -> Optional[re.Match]:
    for match in IRREVERSIBLE_ACTION_RE.finditer(content):
        clause_start = max(content.rfind(ch, 0, match.start()) for ch in ".;!?\n") + 1
        if not PROHIBITION_RE.match(content[clause_start:match.start()]):
            return match
    return None


def check_irreversible_actions(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.all_content
    match = _unprohibited_action(content)
    if match and not CONFIRMATION_RE.search(content):
        return rule.failed(
            f"Irreversible action without explicit confirmation ('{match.group(0)}')",
            "Require explicit user confirmation before any irreversible action such as deleting data, making payments or deploying to production.",
        )
    return rule.passed("Irreversible actions are absent or require confirmation")


# === ETH-03: third-party sharing ===


def check_third_party_sharing(rule: Rule, docs: DocumentSet) -> Check:
    content = docs.all_content
    if find_first(THIRD_PARTY_TRANSFER_PATTERNS, content) and not CONSENT_RE.search(content):
        return rule.warned(
            "Data sharing with third parties mentioned without a consent reference",
            "Ask for the user's consent before sharing their data with third parties and say so in the agent instructions.",
        )
    return rule.passed("No unconsented third-party sharing detected")


# === ETH-04: undisclosed AI ===

IMPERSONATION_RE = re.compile(
    r"\bpretend\s+(?:to\s+be|you\s+are|you're)\s+(?:an?\s+)?(?:real\s+)?(?:human|person)\b"
    r"|\b(?:never|don't|do\s+not|must\s+not)\s+(?:reveal|admit|disclose|mention|say)\b.{0,30}?"
    r"\b(?:an?\s+)?(?:ai|bot|chatbot|language\s+model|llm)\b"
    r"|\bclaim\s+to\s+be\s+(?:an?\s+)?(?:real\s+)?(?:human|person)\b"
    r"|\bfinge\s+ser\s+(?:una\s+)?persona\b|\bno\s+reveles\s+que\s+eres\b",
    re.IGNORECASE,
)


def check_ai_disclosure(rule: Rule, docs: DocumentSet) -> Check:
    if IMPERSONATION_RE.search(docs.join(Slot.SOUL, Slot.AGENTS)):
        return rule.failed(
            "Persona instructed to hide that it is an AI",
            "Let the agent disclose that it is an AI when asked. Remove instructions to impersonate a human.",
        )
    return rule.passed("No instructions to conceal the agent's AI nature")


SECURITY_CATALOG = build_catalog(
    "security",
    [
        Rule("SEC-01", Severity.CRITICAL, check_plaintext_secrets),
        Rule("SEC-02", Severity.HIGH, check_dm_policy, (Slot.CONFIG,)),
        Rule("SEC-03", Severity.HIGH, check_allow_from, (Slot.CONFIG,)),
        Rule("SEC-04", Severity.HIGH, check_credential_references, (Slot.SOUL, Slot.AGENTS)),
        Rule("SEC-05", Severity.HIGH, check_destructive_commands),
        Rule("SEC-06", Severity.MEDIUM, check_personal_data),
        Rule("SEC-07", Severity.MEDIUM, check_exfiltration),
        Rule("SEC-08", Severity.LOW, check_session_isolation, (Slot.CONFIG,)),
        Rule("SEC-09", Severity.MEDIUM, check_privileged_execution),
        Rule("SEC-10", Severity.MEDIUM, check_tool_exposure, (Slot.TOOLS,)),
        Rule("SEC-11", Severity.MEDIUM, check_messaging_channels),
        Rule("SEC-12", Severity.LOW, check_broad_retention),
        Rule("ETH-01", Severity.MEDIUM, check_external_communication),
        Rule("ETH-02", Severity.MEDIUM, check_irreversible_actions),
        Rule("ETH-03", Severity.MEDIUM, check_third_party_sharing),
        Rule("ETH-04", Severity.MEDIUM, check_ai_disclosure, (Slot.SOUL, Slot.AGENTS)),
    ],
    policy_blockers={"ETH-02"},
    all_passed_message="All security checks passed. Your agent configuration is secure.",
)
