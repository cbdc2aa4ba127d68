"""Bounded 0-100 risk score from finding severities.

These are the defaults; ``DetectorConfig`` carries per-deployment overrides.
"""

from __future__ import annotations
from collections.abc import Iterable, Mapping

from .types import AcceptedFinding, Severity

BLOCK_THRESHOLD = 50
MAX_SCORE = 100

STRUCTURED_WEIGHTS: Mapping[Severity, int] = {
    Severity.HIGH: 30,
    Severity.MEDIUM: 15,
    Severity.LOW: 5,
}
KEYWORD_WEIGHTS: Mapping[Severity, int] = {
    Severity.HIGH: 25,
    Severity.MEDIUM: 15,
    Severity.LOW: 5,
}
# Email is scored on its own line regardless of its declared severity
EMAIL_WEIGHT = 15


def finding_weight(
    finding: AcceptedFinding,
    *,
    structured_weights: Mapping[Severity, int] = STRUCTURED_WEIGHTS,
    keyword_weights: Mapping[Severity, int] = KEYWORD_WEIGHTS,
    email_weight: int = EMAIL_WEIGHT,
) -> int:
    if finding.is_keyword:
        return keyword_weights[finding.severity]
    if finding.type_id == "email":
        return email_weight
    return structured_weights[finding.severity]


def score(
    findings: Iterable[AcceptedFinding],
    *,
    structured_weights: Mapping[Severity, int] = STRUCTURED_WEIGHTS,
    keyword_weights: Mapping[Severity, int] = KEYWORD_WEIGHTS,
    email_weight: int = EMAIL_WEIGHT,
) -> int:
    """Sum per-finding weights and clamp to [0, 100]."""
    total = sum(
        finding_weight(
            f,
            structured_weights=structured_weights,
            keyword_weights=keyword_weights,
            email_weight=email_weight,
        )
        for f in findings
    )
    return max(0, min(MAX_SCORE, total))


def should_block(risk_score: int, threshold: int = BLOCK_THRESHOLD) -> bool:
    return risk_score >= threshold
