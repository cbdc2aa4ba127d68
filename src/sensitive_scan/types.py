"""Core types."""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

import regex


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(IntEnum):
    """Overlap priority tier.  Lower tiers claim text spans first."""
    EMAIL = 0           # dedicated pre-pass
    CREDENTIAL = 1      # keys, tokens, connection strings
    CONTEXTUAL_ID = 2   # identifiers anchored on a keyword ("PAN: ...")
    STRUCTURED = 3      # self-describing formats (cards, SSNs, IPs)
    GENERIC = 4         # loose numeric shapes (phones, account numbers)


@dataclass(frozen=True, slots=True)
class DetectionRule:
    """A single registry entry for structured PII / secrets."""
    type_id: str           # e.g. "email", "creditCard", "apiKey"
    pattern: regex.Pattern  # regex package, so scans can pass timeout=
    severity: Severity
    suggestion: str
    priority: Priority = Priority.STRUCTURED


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """A confidentiality / business-sensitivity phrase."""
    keyword: str
    severity: Severity
    suggestion: str
    pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Whole-phrase match; inner whitespace may vary
        words = [re.escape(w) for w in self.keyword.split()]
        compiled = re.compile(
            r"(?<![A-Za-z0-9])" + r"\s+".join(words) + r"(?![A-Za-z0-9])",
            re.IGNORECASE,
        )
        object.__setattr__(self, "pattern", compiled)


@dataclass(frozen=True, slots=True)
class RawMatch:
    """One pattern hit before validation.  Span is half-open."""
    type_id: str
    text: str
    start: int
    end: int


KEYWORD_TYPE = "sensitive_keyword"


@dataclass(frozen=True, slots=True)
class AcceptedFinding:
    """A validated detection, ready for display."""
    type_id: str
    display_value: str     # masked
    original_value: str    # unmasked, for caller-side redaction
    severity: Severity
    position: int
    suggestion: str

    @property
    def end(self) -> int:
        return self.position + len(self.original_value)

    @property
    def is_keyword(self) -> bool:
        return self.type_id == KEYWORD_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_id,
            "value": self.display_value,
            "severity": self.severity.value,
            "position": self.position,
            "suggestion": self.suggestion,
        }


@dataclass(slots=True)
class ScanResult:
    """Result of scanning one text."""
    findings: list[AcceptedFinding] = field(default_factory=list)
    risk_score: int = 0                              # 0–100
    block_threshold: int = 50
    compliance_tags: frozenset[str] = frozenset()
    skipped_rules: list[str] = field(default_factory=list)  # rules dropped on a fault

    @property
    def has_sensitive_content(self) -> bool:
        return bool(self.findings)

    @property
    def should_block(self) -> bool:
        return self.risk_score >= self.block_threshold

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasSensitiveContent": self.has_sensitive_content,
            "findings": [f.to_dict() for f in self.findings],
            "riskScore": self.risk_score,
            "shouldBlock": self.should_block,
            "complianceTags": sorted(self.compliance_tags),
        }
