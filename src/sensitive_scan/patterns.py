"""Structured PII and secret formats, in scan order.

Rules are listed in overlap-priority order: the email pre-pass, then
credentials, then keyword-anchored identifiers, then self-describing
formats, then loose numeric shapes.  A rule earlier in this list claims a
text span before any later rule can.  The ``priority`` field makes the
tier explicit so the order survives re-sorting.
"""

from __future__ import annotations
from collections.abc import Iterable

import regex

from .errors import RegistryError
from .types import DetectionRule, Priority, Severity

_I = regex.IGNORECASE

HIGH, MEDIUM, LOW = Severity.HIGH, Severity.MEDIUM, Severity.LOW

# UPI handle suffixes issued by the major payment apps
UPI_HANDLES = (
    "paytm", "ybl", "okaxis", "okhdfcbank", "okicici", "oksbi",
    "axl", "ibl", "upi", "phonepe", "gpay", "amazonpay",
)
_UPI = "|".join(UPI_HANDLES)


def _rule(
    type_id: str,
    pattern: str,
    severity: Severity,
    suggestion: str,
    priority: Priority,
    flags: int = 0,
) -> DetectionRule:
    return DetectionRule(
        type_id=type_id,
        pattern=regex.compile(pattern, flags | regex.ASCII),   # ASCII digits and word chars only
        severity=severity,
        suggestion=suggestion,
        priority=priority,
    )


DETECTION_RULES: tuple[DetectionRule, ...] = (
    # ── Email pre-pass ──────────────────────────────────────────────
    _rule("email",
          r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b",
          MEDIUM, "Email address detected - consider removing",
          Priority.EMAIL),

    # ── Credentials and secrets ─────────────────────────────────────
    _rule("privateKey",
          r"-----BEGIN\s+(?:RSA\s+|EC\s+|DSA\s+|OPENSSH\s+)?PRIVATE\s+KEY-----"
          r"[\s\S]{50,}?"
          r"-----END\s+(?:RSA\s+|EC\s+|DSA\s+|OPENSSH\s+)?PRIVATE\s+KEY-----",
          HIGH, "Private key detected - NEVER SHARE - critical security breach risk",
          Priority.CREDENTIAL, _I),
    _rule("jwt",
          r"\beyJ[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}",
          HIGH, "JWT token detected - NEVER SHARE - authentication token leak risk",
          Priority.CREDENTIAL),
    _rule("awsKey",
          r"\bAKIA[0-9A-Z]{16}\b"
          r"|(?i:\baws[_\-]?(?:access|secret)[_\-]?(?:access[_\-]?)?key(?:[_\-]?id)?)"
          r"\s*[:=]\s*['\"]?[A-Za-z0-9/+=]{16,}['\"]?",
          HIGH, "AWS credentials detected - NEVER SHARE - cloud infrastructure breach risk",
          Priority.CREDENTIAL),
    _rule("apiKey",
          r"\b(?:"
          r"[spr]k_(?:test|live)_[A-Za-z0-9]{24,}"
          r"|sk-[A-Za-z0-9_\-]{20,}"
          r"|AIza[A-Za-z0-9_\-]{35}"
          r"|gh[pousr]_[A-Za-z0-9]{36,}"
          r"|github_pat_[A-Za-z0-9_]{82,}"
          r"|xox[baprse]-[A-Za-z0-9\-]{50,}"
          r"|Bearer\s+[A-Za-z0-9_\-.]{20,}"
          r"|(?:api[_\-]?key|apikey)\s*[:=]\s*['\"]?[A-Za-z0-9_\-]{20,}['\"]?"
          r")",
          HIGH, "API key/token detected - NEVER SHARE - security breach risk",
          Priority.CREDENTIAL, _I),
    _rule("password",
          r"\b(?:password|passwd|pwd|pass|secret[_\-]?key|private[_\-]?key)"
          r"\s*[:=]\s*['\"]?[^\s'\"]{8,}['\"]?",
          HIGH, "Password/secret key detected - DO NOT SHARE - security breach risk",
          Priority.CREDENTIAL, _I),
    _rule("databaseUrl",
          r"\b(?:postgres(?:ql)?|mysql|mariadb|mssql|mongodb(?:\+srv)?|rediss?|sqlite|amqp)"
          r"://[^\s'\"<>]+",
          HIGH, "Database connection string detected - NEVER SHARE - data breach risk",
          Priority.CREDENTIAL, _I),
    _rule("cryptoKey",
          r"(?i:\b(?:bitcoin|btc|ethereum|eth|wallet|private\s+key))\s*[:=]?\s*"
          r"(?:[13][a-km-zA-HJ-NP-Z1-9]{25,34}|0x[a-fA-F0-9]{40})\b",
          HIGH, "Cryptocurrency wallet/private key detected - NEVER SHARE - financial loss risk",
          Priority.CREDENTIAL),

    # ── Keyword-anchored identifiers ────────────────────────────────
    _rule("aadhaar",
          r"\b(?:aadhaar|aadhar|uidai)\s*(?:number|no\.?|#|id)?\s*[:=]?\s*"
          r"\d{4}[\s\-]?\d{4}[\s\-]?\d{4}\b",
          HIGH, "Aadhaar number detected - DO NOT SHARE - critical identity theft risk (India)",
          Priority.CONTEXTUAL_ID, _I),
    _rule("pan",
          r"\b(?:pan|permanent\s+account\s+number|pan\s+card|pan\s+number)"
          r"\s*[:=,\s\"']*\s*[A-Z]{5}\d{4}[A-Z]\b",
          HIGH, "PAN card number detected - DO NOT SHARE - tax identity theft risk (India)",
          Priority.CONTEXTUAL_ID, _I),
    _rule("voterId",
          r"\b(?:voter\s+id|epic|electoral\s+photo\s+identity\s+card|voter\s+card)"
          r"\s*(?:number|no\.?|#)?\s*[:=]?\s*[A-Z]{3}\d{7}\b",
          HIGH, "Voter ID/EPIC number detected - DO NOT SHARE - identity theft risk (India)",
          Priority.CONTEXTUAL_ID, _I),
    _rule("ifsc",
          r"\b(?:ifsc|ifsc\s+code)\s*[:=]?\s*[A-Z]{4}0[A-Z0-9]{6}\b",
          HIGH, "IFSC code detected - DO NOT SHARE - bank account exposure risk (India)",
          Priority.CONTEXTUAL_ID, _I),
    _rule("upiId",
          r"\b(?:upi|upi\s+id|upi\s+handle|vpa|virtual\s+payment\s+address)\s*[:=]?\s*"
          rf"[A-Za-z0-9._\-]+@(?:{_UPI})\b",
          HIGH, "UPI ID detected - DO NOT SHARE - financial fraud risk (India)",
          Priority.CONTEXTUAL_ID, _I),
    _rule("gstin",
          r"\b(?:gstin|gst\s+number|gst\s+id)\s*[:=]?\s*"
          r"\d{2}[A-Z]{5}\d{4}[A-Z][A-Z\d]Z[A-Z\d]\b",
          HIGH, "GSTIN detected - DO NOT SHARE - business tax identity exposure (India)",
          Priority.CONTEXTUAL_ID, _I),
    _rule("passport",
          r"\bpassport(?:\s*(?:number|no\.?|#))?\s*[:=]?\s*(?=[A-Z]*\d)[A-Z0-9]{6,12}\b",
          HIGH, "Passport number detected - DO NOT SHARE - identity theft risk",
          Priority.CONTEXTUAL_ID, _I),
    _rule("driverLicense",
          r"\b(?:driver'?s?\s*licen[cs]e(?:\s*(?:number|no\.?|#))?|dl|license\s*(?:number|no\.?|#))"
          r"\s*[:=]?\s*(?=[A-Z]*\d)[A-Z0-9]{6,12}\b",
          HIGH, "Driver license number detected - DO NOT SHARE - identity theft risk",
          Priority.CONTEXTUAL_ID, _I),
    _rule("taxId",
          r"\b(?:tax\s+id|ein|employer\s+identification(?:\s+number)?|tin)"
          r"\s*(?:number|no\.?|#)?\s*[:=]?\s*\d{2}-?\d{7}\b",
          HIGH, "Tax ID/EIN detected - DO NOT SHARE - business identity theft risk",
          Priority.CONTEXTUAL_ID, _I),
    _rule("medicalRecord",
          r"\b(?:medical\s+record(?:\s+number)?|patient\s+id|mrn|health\s+record)"
          r"\s*(?:number|no\.?|#)?\s*[:=]?\s*(?=[A-Z]*\d)[A-Z0-9]{6,}\b",
          HIGH, "Medical record/patient ID detected - DO NOT SHARE - HIPAA violation risk",
          Priority.CONTEXTUAL_ID, _I),
    _rule("windowsKey",
          r"\b(?:windows\s*(?:activation|product|license|serial)\s*key|activation\s*key"
          r"|product\s*key|license\s*key|serial\s*key)\s*[:=]?\s*"
          r"[A-Z0-9]{5}(?:-[A-Z0-9]{5}){4}\b",
          HIGH, "Windows activation key detected - DO NOT SHARE - software license violation risk",
          Priority.CONTEXTUAL_ID, _I),
    _rule("indianBankAccount",
          r"\b(?:account\s+number|account\s+no|acc\s+no|savings\s+account|current\s+account)"
          r"\s*(?:number|no\.?|#)?\s*[:=.]?\s*\d{9,18}\b",
          HIGH, "Bank account number detected - DO NOT SHARE - financial fraud risk (India)",
          Priority.CONTEXTUAL_ID, _I),

    # ── Self-describing formats ─────────────────────────────────────
    _rule("creditCard",
          r"\b(?:(?:\d{4}[\-\s]?){3}\d{4}|3[47]\d{2}[\-\s]?\d{6}[\-\s]?\d{5})\b",
          HIGH, "Credit card number detected - DO NOT SHARE - financial data leak risk",
          Priority.STRUCTURED),
    _rule("ssn",
          r"\b(?:\d{3}[\-.\s]\d{2}[\-.\s]\d{4}|\d{4}-\d{4}|\d{9})\b",
          HIGH, "SSN detected - DO NOT SHARE - this is highly sensitive",
          Priority.STRUCTURED),
    _rule("ipAddress",
          r"\b(?:\d{1,3}\.){3}\d{1,3}\b",
          LOW, "IP address detected - consider removing if internal/private",
          Priority.STRUCTURED),
    _rule("aadhaarStandalone",
          r"\b\d{4}[\s\-]?\d{4}[\s\-]?\d{4}\b",
          HIGH, "Aadhaar number detected - DO NOT SHARE - critical identity theft risk (India)",
          Priority.STRUCTURED),
    _rule("panStandalone",
          r"\b[A-Za-z]{5}\d{4}[A-Za-z]\b",
          HIGH, "PAN card number detected - DO NOT SHARE - tax identity theft risk (India)",
          Priority.STRUCTURED),
    _rule("ifscStandalone",
          r"\b[A-Z]{4}0[A-Z0-9]{6}\b",
          HIGH, "IFSC code detected - DO NOT SHARE - bank account exposure risk (India)",
          Priority.STRUCTURED),
    _rule("upiIdStandalone",
          rf"\b[A-Za-z0-9._\-]+@(?:{_UPI})\b",
          HIGH, "UPI ID detected - DO NOT SHARE - financial fraud risk (India)",
          Priority.STRUCTURED, _I),
    _rule("productKey",
          r"\b[A-Z0-9]{5}(?:-[A-Z0-9]{5}){4}\b",
          HIGH, "Product/activation key detected - DO NOT SHARE - software license violation risk",
          Priority.STRUCTURED),

    # ── Loose numeric shapes ────────────────────────────────────────
    _rule("indianPhone",
          r"(?<![\w+])(?:\+91[\-\s]?|91[\-\s]?|0)?[6-9]\d{9}\b",
          MEDIUM, "Indian phone number detected - consider removing for privacy",
          Priority.GENERIC),
    _rule("phone",
          r"(?<![\w+])(?:\+?\d{1,4}[\-.\s]?)?\(?\d{1,4}\)?[\-.\s]?\d{1,4}[\-.\s]?\d{1,9}\b",
          MEDIUM, "Phone number detected - consider removing",
          Priority.GENERIC),
    _rule("bankAccount",
          r"\b(?:\d{8,17}"
          r"|routing\s*(?:number|no\.?|#)?\s*[:=#]?\s*\d{9}"
          r"|account\s*(?:number|num|no\.?|#)?\s*[:=#]?\s*\d{8,17})\b",
          HIGH, "Bank account/routing number detected - DO NOT SHARE - financial data leak risk",
          Priority.GENERIC, _I),
)


def validate_registry(rules: Iterable[DetectionRule]) -> None:
    """Fail fast on an empty or duplicate type id.

    Duplicates would make overlap priority ambiguous, so this runs at
    import time and whenever a detector is built with extra rules.
    """
    seen: set[str] = set()
    for rule in rules:
        if not isinstance(rule.type_id, str) or not rule.type_id.strip():
            raise RegistryError(f"rule has empty type id: {rule!r}")
        if rule.type_id in seen:
            raise RegistryError(f"duplicate type id in registry: {rule.type_id!r}")
        seen.add(rule.type_id)


def rules_by_type() -> dict[str, DetectionRule]:
    return {r.type_id: r for r in DETECTION_RULES}


validate_registry(DETECTION_RULES)
