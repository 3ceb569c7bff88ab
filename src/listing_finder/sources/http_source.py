from __future__ import annotations

from typing import Any

import requests

from listing_finder.config import SourceSettings

from .base import Source, extract_items
from .registry import register_source


class HttpJsonSource(Source):
    def __init__(self, settings: SourceSettings, kind: str) -> None:
        super().__init__(source_id=settings.id, kind=kind)
        self.url = settings.location
        timeout_raw = settings.options.get("timeout_seconds", 30)
        self.timeout_seconds = int(timeout_raw) if timeout_raw is not None else 30

    def fetch(self) -> list[Any]:
        headers = {
            "User-Agent": "listing-finder/0.1",
            "Accept": "application/json",
        }
        response = requests.get(self.url, timeout=self.timeout_seconds, headers=headers)
        response.raise_for_status()

        items = extract_items(response.json())
        return self.build_records(items)


@register_source("http_json")
def _build_http_source(settings: SourceSettings, kind: str) -> Source:
    return HttpJsonSource(settings, kind)
