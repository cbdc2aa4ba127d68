"""Map findings to regulatory compliance tags.

Rules are substring tests against the lower-cased type id (structured
findings) or the keyword phrase (keyword findings).  A finding can pick
up several tags, or none.
"""

from __future__ import annotations
from collections.abc import Iterable

from .types import AcceptedFinding

HEALTH_DATA = "health-data"
PAYMENT_DATA = "payment-data"
GENERAL_PRIVACY = "general-privacy"
REGIONAL_PRIVACY = "regional-privacy"
FINANCIAL_REPORTING = "financial-reporting"
SECURITY_INFRASTRUCTURE = "security-infrastructure"

ALL_TAGS = frozenset({
    HEALTH_DATA, PAYMENT_DATA, GENERAL_PRIVACY,
    REGIONAL_PRIVACY, FINANCIAL_REPORTING, SECURITY_INFRASTRUCTURE,
})

_TAG_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (HEALTH_DATA, (
        "medical", "patient", "phi", "hospital", "ayushman",
    )),
    (PAYMENT_DATA, (
        "payment", "creditcard", "bank", "crypto", "upi", "ifsc",
    )),
    (GENERAL_PRIVACY, (
        "email", "phone", "ssn", "social security", "passport", "license",
        "aadhaar", "pan", "voter", "pii", "personal information", "customer data",
    )),
    (REGIONAL_PRIVACY, (
        "aadhaar", "pan", "voter", "ifsc", "upi", "gstin", "gst number", "indian",
    )),
    (FINANCIAL_REPORTING, (
        "revenue", "salary", "taxid", "gstin", "gst number", "financial statement",
    )),
    (SECURITY_INFRASTRUCTURE, (
        "key", "token", "password", "jwt", "aws", "ssh", "database",
    )),
)


def _subject(finding: AcceptedFinding) -> str:
    if finding.is_keyword:
        return finding.display_value.lower()
    return finding.type_id.lower()


def tags_for(finding: AcceptedFinding) -> set[str]:
    subject = _subject(finding)
    return {tag for tag, needles in _TAG_RULES if any(n in subject for n in needles)}


def classify(findings: Iterable[AcceptedFinding]) -> frozenset[str]:
    """Union of tags over all findings."""
    tags: set[str] = set()
    for f in findings:
        tags |= tags_for(f)
    return frozenset(tags)
