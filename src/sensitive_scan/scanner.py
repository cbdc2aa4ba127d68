"""Run one rule over the text and collect raw spans.

Rule patterns are compiled with the ``regex`` package.  Its ``timeout``
argument interrupts a single backtracking match, which the standard
``re`` module cannot do, so a runaway pattern costs at most one time
budget.  ``finditer`` hands back a fresh iterator per call; nothing
carries over from one text to the next.
"""

from __future__ import annotations
import time
from collections.abc import Iterable

from .types import DetectionRule, RawMatch

# Safety bounds per rule evaluation
DEFAULT_MAX_MATCHES = 1000
DEFAULT_TIME_BUDGET = 0.25   # seconds


class RuleBudgetExceeded(RuntimeError):
    """A single rule produced too many matches or ran too long."""

    def __init__(self, type_id: str, reason: str) -> None:
        super().__init__(f"rule {type_id!r} exceeded its budget: {reason}")
        self.type_id = type_id
        self.reason = reason


def scan_order(rules: Iterable[DetectionRule]) -> list[DetectionRule]:
    """Rules sorted by priority tier, registry order within a tier."""
    indexed = list(enumerate(rules))
    indexed.sort(key=lambda pair: (pair[1].priority, pair[0]))
    return [rule for _, rule in indexed]


def scan_rule(
    rule: DetectionRule,
    text: str,
    *,
    max_matches: int = DEFAULT_MAX_MATCHES,
    time_budget: float = DEFAULT_TIME_BUDGET,
) -> list[RawMatch]:
    """Return leftmost, non-overlapping matches of ``rule`` in ``text``.

    Raises RuleBudgetExceeded when either bound is crossed; the caller
    decides whether to skip the rule.
    """
    deadline = time.monotonic() + time_budget
    matches: list[RawMatch] = []
    try:
        for m in rule.pattern.finditer(text, timeout=time_budget):
            if m.end() == m.start():
                continue   # zero-width hits carry nothing to report
            matches.append(RawMatch(
                type_id=rule.type_id,
                text=m.group(),
                start=m.start(),
                end=m.end(),
            ))
            if len(matches) > max_matches:
                raise RuleBudgetExceeded(rule.type_id, f"more than {max_matches} matches")
            if time.monotonic() > deadline:
                raise RuleBudgetExceeded(rule.type_id, f"over {time_budget:.3f}s")
    except TimeoutError:
        raise RuleBudgetExceeded(rule.type_id, f"over {time_budget:.3f}s") from None
    return matches
