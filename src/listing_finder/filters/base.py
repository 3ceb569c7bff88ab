from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(slots=True)
class FilterResult:
    matched: bool
    reasons: list[str] = field(default_factory=list)

    def reason_text(self) -> str:
        return "; ".join(self.reasons) if self.reasons else "no specific reason"


class Filter(ABC):
    @abstractmethod
    def evaluate(self, record: Any) -> FilterResult:
        """Evaluate a record and return match decision with reasons."""

    def matches(self, record: Any) -> bool:
        return self.evaluate(record).matched


def any_of(selected: set[str], values: Iterable[str] | None) -> bool:
    """True when the selection is inactive or intersects ``values``."""
    if not selected:
        return True
    return any(value in selected for value in values or ())


def contains_text(needle: str, haystacks: Iterable[str | None]) -> bool:
    lowered = needle.lower()
    return any(lowered in (haystack or "").lower() for haystack in haystacks)
