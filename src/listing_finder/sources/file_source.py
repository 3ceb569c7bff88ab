from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from listing_finder.config import SourceSettings

from .base import Source, extract_items
from .registry import register_source

logger = logging.getLogger(__name__)


class FileSource(Source):
    """Reads records from a YAML or JSON file holding a list of mappings."""

    def __init__(self, settings: SourceSettings, kind: str) -> None:
        super().__init__(source_id=settings.id, kind=kind)
        self.path = Path(settings.location)

    def fetch(self) -> list[Any]:
        with self.path.open("r", encoding="utf-8") as handle:
            # JSON is a subset of YAML
            parsed = yaml.safe_load(handle) or []

        items = extract_items(parsed)
        records = self.build_records(items)
        if len(records) != len(items):
            logger.warning(
                "Skipped %d non-mapping entries in %s",
                len(items) - len(records),
                self.path,
            )
        return records


@register_source("file")
def _build_file_source(settings: SourceSettings, kind: str) -> Source:
    return FileSource(settings, kind)
