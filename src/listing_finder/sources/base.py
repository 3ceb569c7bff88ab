from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from listing_finder.models import RECORD_BUILDERS


class Source(ABC):
    def __init__(self, source_id: str, kind: str) -> None:
        self.source_id = source_id
        self.kind = kind

    @abstractmethod
    def fetch(self) -> list[Any]:
        """Fetch and normalize records from the source."""

    def build_records(self, items: list[Any]) -> list[Any]:
        builder = RECORD_BUILDERS[self.kind]
        return [builder(item) for item in items if isinstance(item, dict)]


def extract_items(parsed: Any) -> list[Any]:
    """Accept a bare list or a wrapper object carrying the list."""
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        for key in ("results", "items", "records"):
            value = parsed.get(key)
            if isinstance(value, list):
                return value
    return []
