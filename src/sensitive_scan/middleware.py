"""OpenAI-compatible middleware — scan chat messages before they leave.

Usage as a function wrapper:

    mw = ScanMiddleware.create()

    report = mw.scan_messages(messages)
    if report.should_block:
        ...                                   # caller's policy decision

    # Or forward with structured values masked in place
    safe_messages = mw.pre_send(messages)

The middleware never decides block/allow on its own; it reports.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .detector import Detector, DetectorConfig, redact
from .types import ScanResult


@dataclass(slots=True)
class MessageReport:
    """Per-message scan results for one outbound request."""
    results: dict[int, ScanResult] = field(default_factory=dict)   # message index → result

    @property
    def risk_score(self) -> int:
        return max((r.risk_score for r in self.results.values()), default=0)

    @property
    def should_block(self) -> bool:
        return any(r.should_block for r in self.results.values())

    @property
    def compliance_tags(self) -> frozenset[str]:
        tags: frozenset[str] = frozenset()
        for r in self.results.values():
            tags |= r.compliance_tags
        return tags


@dataclass
class ScanMiddleware:
    """Middleware that sits between client and LLM provider."""

    detector: Detector
    roles: frozenset[str] = frozenset({"user"})   # roles whose content is scanned

    @classmethod
    def create(cls, *, config: DetectorConfig | None = None) -> "ScanMiddleware":
        """Factory — creates a middleware with its own detector."""
        return cls(detector=Detector(config))

    def _scannable(self, msg: dict, content_key: str) -> str | None:
        content = msg.get(content_key)
        if msg.get("role") in self.roles and isinstance(content, str) and content:
            return content
        return None

    def scan_messages(
        self,
        messages: list[dict],
        *,
        content_key: str = "content",
    ) -> MessageReport:
        """Scan every message whose role is in ``roles``."""
        report = MessageReport()
        for i, msg in enumerate(messages):
            content = self._scannable(msg, content_key)
            if content is not None:
                report.results[i] = self.detector.detect(content)
        return report

    def pre_send(
        self,
        messages: list[dict],
        *,
        content_key: str = "content",
    ) -> list[dict]:
        """Return new message dicts with structured findings masked.

        Does NOT mutate the originals.
        """
        out: list[dict] = []
        for msg in messages:
            content = self._scannable(msg, content_key)
            if content is None:
                out.append(msg)
                continue
            result = self.detector.detect(content)
            out.append({**msg, content_key: redact(content, result)})
        return out
