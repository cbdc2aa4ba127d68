"""Detector — the main API.  Email pre-pass, structured rules, then keywords.

Usage:
    from sensitive_scan import detect

    result = detect("Reach me at jane@acme.com, card 4111 1111 1111 1111")
    result.risk_score        # 45
    result.should_block      # False
    [f.display_value for f in result.findings]
    # ['j***@acme.com', '****-****-****']

A ``Detector`` holds only immutable configuration, so one instance can be
shared across threads.  Every call to ``detect`` builds its own overlap
resolver; nothing crosses scan invocations.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Mapping

from . import compliance, scoring
from .errors import ConfigError
from .keywords import KEYWORD_RULES, scan_keywords
from .masking import mask
from .overlap import OverlapResolver
from .patterns import DETECTION_RULES, validate_registry
from .scanner import (
    DEFAULT_MAX_MATCHES,
    DEFAULT_TIME_BUDGET,
    scan_order,
    scan_rule,
)
from .types import (
    KEYWORD_TYPE,
    AcceptedFinding,
    DetectionRule,
    ScanResult,
    Severity,
)
from .validators import is_valid

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 100_000


@dataclass
class DetectorConfig:
    """Configuration for the Detector."""
    block_threshold: int = scoring.BLOCK_THRESHOLD
    structured_weights: Mapping[Severity, int] = field(
        default_factory=lambda: dict(scoring.STRUCTURED_WEIGHTS))
    keyword_weights: Mapping[Severity, int] = field(
        default_factory=lambda: dict(scoring.KEYWORD_WEIGHTS))
    email_weight: int = scoring.EMAIL_WEIGHT
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH   # longer input is truncated
    max_matches_per_rule: int = DEFAULT_MAX_MATCHES
    rule_time_budget: float = DEFAULT_TIME_BUDGET      # seconds per rule
    keywords_enabled: bool = True
    # Extra rules appended after the built-in registry (same priority semantics)
    extra_rules: list[DetectionRule] = field(default_factory=list)
    # Type ids to always skip (e.g. don't report IP addresses)
    skip_types: set[str] = field(default_factory=set)
    # Allow-list: values that should NEVER be reported
    allow_list: set[str] = field(default_factory=set)

    def validate(self) -> None:
        if not 0 <= self.block_threshold <= scoring.MAX_SCORE:
            raise ConfigError(f"block_threshold must be in [0, 100], got {self.block_threshold}")
        for name in ("structured_weights", "keyword_weights"):
            weights = getattr(self, name)
            missing = set(Severity) - set(weights)
            if missing:
                raise ConfigError(f"{name} missing severities: {sorted(s.value for s in missing)}")
            if any(w < 0 for w in weights.values()):
                raise ConfigError(f"{name} must be non-negative")
        if self.email_weight < 0:
            raise ConfigError("email_weight must be non-negative")
        if self.max_input_length <= 0:
            raise ConfigError("max_input_length must be positive")
        if self.max_matches_per_rule <= 0:
            raise ConfigError("max_matches_per_rule must be positive")
        if self.rule_time_budget <= 0:
            raise ConfigError("rule_time_budget must be positive")


class Detector:
    """Sensitive-content detector.

    Pass 1: email rule, claimed before anything else
    Pass 2: remaining structured rules, by priority tier then registry order
    Pass 3: keyword rules (no span claims)
    """

    def __init__(self, config: DetectorConfig | None = None) -> None:
        self.config = config or DetectorConfig()
        self.config.validate()
        rules = (*DETECTION_RULES, *self.config.extra_rules)
        validate_registry(rules)
        self._rules: tuple[DetectionRule, ...] = tuple(scan_order(rules))

    @property
    def rules(self) -> tuple[DetectionRule, ...]:
        """Structured rules in the order they claim spans."""
        return self._rules

    def detect(self, text: str) -> ScanResult:
        """Scan ``text`` and return the aggregate result.

        Never raises for string input: a rule that faults or exceeds its
        budget is skipped and listed in ``ScanResult.skipped_rules``.
        """
        cfg = self.config
        if len(text) > cfg.max_input_length:
            logger.warning(
                "input of %d chars truncated to %d for scanning",
                len(text), cfg.max_input_length,
            )
            text = text[:cfg.max_input_length]

        findings: list[AcceptedFinding] = []
        skipped: list[str] = []
        resolver = OverlapResolver()

        # --- Structured rules (email first by tier) ---
        for rule in self._rules:
            if rule.type_id in cfg.skip_types:
                continue
            try:
                raw_matches = scan_rule(
                    rule, text,
                    max_matches=cfg.max_matches_per_rule,
                    time_budget=cfg.rule_time_budget,
                )
            except Exception:
                logger.warning("skipping rule %r for this scan", rule.type_id, exc_info=True)
                skipped.append(rule.type_id)
                continue

            for raw in raw_matches:
                if raw.text in cfg.allow_list:
                    continue
                if resolver.overlaps(raw.start, raw.end):
                    continue
                if not is_valid(raw.type_id, raw.text, text, raw.start):
                    continue
                resolver.try_claim(raw.start, raw.end, raw.type_id)
                findings.append(AcceptedFinding(
                    type_id=rule.type_id,
                    display_value=mask(rule.type_id, raw.text),
                    original_value=raw.text,
                    severity=rule.severity,
                    position=raw.start,
                    suggestion=rule.suggestion,
                ))

        # --- Keywords (document-level, never contend for spans) ---
        if cfg.keywords_enabled and KEYWORD_TYPE not in cfg.skip_types:
            for kw, m in scan_keywords(text, KEYWORD_RULES):
                if m.group() in cfg.allow_list:
                    continue
                findings.append(AcceptedFinding(
                    type_id=KEYWORD_TYPE,
                    display_value=kw.keyword,
                    original_value=m.group(),
                    severity=kw.severity,
                    position=m.start(),
                    suggestion=kw.suggestion,
                ))

        risk = scoring.score(
            findings,
            structured_weights=cfg.structured_weights,
            keyword_weights=cfg.keyword_weights,
            email_weight=cfg.email_weight,
        )
        result = ScanResult(
            findings=findings,
            risk_score=risk,
            block_threshold=cfg.block_threshold,
            compliance_tags=compliance.classify(findings),
            skipped_rules=skipped,
        )
        logger.debug(
            "scan: %d findings, risk=%d, block=%s, tags=%s",
            len(findings), risk, result.should_block, sorted(result.compliance_tags),
        )
        return result

    def detect_many(self, texts: list[str]) -> list[ScanResult]:
        """Scan a batch of independent texts."""
        return [self.detect(t) for t in texts]


def redact(text: str, result: ScanResult) -> str:
    """Replace structured finding spans in ``text`` with their display values.

    Keyword findings are left in place; they flag the document, not a
    token.  ``result`` must come from scanning this same ``text``.
    """
    out = text
    spans = [f for f in result.findings if not f.is_keyword]
    # Right-to-left to preserve offsets
    for f in sorted(spans, key=lambda f: f.position, reverse=True):
        if out[f.position:f.end] != f.original_value:
            continue
        out = out[:f.position] + f.display_value + out[f.end:]
    return out


_default_detector: Detector | None = None


def _get_default() -> Detector:
    global _default_detector
    if _default_detector is None:
        _default_detector = Detector()
    return _default_detector


def detect(text: str) -> ScanResult:
    """Scan ``text`` with the default configuration."""
    return _get_default().detect(text)
