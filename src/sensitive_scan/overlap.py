"""First-come, interval-exclusive span reservation.

Priority lives entirely in the order ``try_claim`` is called.  One
resolver per scan; it is never shared.
"""

from __future__ import annotations


class OverlapResolver:
    """Tracks accepted ``[start, end)`` ranges tagged by type id."""

    __slots__ = ("_claimed",)

    def __init__(self) -> None:
        self._claimed: list[tuple[int, int, str]] = []

    def overlaps(self, start: int, end: int) -> bool:
        return any(not (end <= s or start >= e) for s, e, _ in self._claimed)

    def try_claim(self, start: int, end: int, type_id: str) -> bool:
        """Reserve the range if it is disjoint from every claimed range."""
        if self.overlaps(start, end):
            return False
        self._claimed.append((start, end, type_id))
        return True

    @property
    def claimed(self) -> list[tuple[int, int, str]]:
        return list(self._claimed)

    def __len__(self) -> int:
        return len(self._claimed)
