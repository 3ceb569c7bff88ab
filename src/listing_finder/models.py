from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from listing_finder.utils.datetime_utils import parse_datetime_utc

_FIRST_INTEGER = re.compile(r"\d+")


class RecordStatus(str, Enum):
    OPEN = "Open"
    UPCOMING = "Upcoming"
    CLOSED = "Closed"
    INDETERMINATE = "Indeterminate"


class SortKey(str, Enum):
    DATE_CLOSING_DESC = "dateClosingDesc"
    DATE_CLOSING_ASC = "dateClosingAsc"
    TITLE_ASC = "titleAsc"
    TITLE_DESC = "titleDesc"
    STATUS_PRIORITY = "statusPriority"


@dataclass(slots=True)
class Grant:
    id: str
    title: str
    reference: str
    description: str = ""
    opens_at: datetime | None = None
    closes_at: datetime | None = None
    uses: list[str] = field(default_factory=list)
    eligibility_requirements: list[str] = field(default_factory=list)
    compatibility_tags: list[str] = field(default_factory=list)
    kind: str | None = None
    is_nationwide: bool = False
    region: str | None = None
    amount: str | None = None
    link: str | None = None

    @property
    def display_title(self) -> str:
        return self.title


@dataclass(slots=True)
class Provider:
    id: str
    name: str
    rating: float = 0.0
    response_hours: int | None = None
    specialties: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    is_online: bool = False
    role: str = ""
    location: str = ""

    @property
    def display_title(self) -> str:
        return self.name


def grant_from_mapping(mapping: dict[str, Any]) -> Grant:
    """Build a Grant from a plain mapping such as a REST payload item.

    camelCase keys and the dataclass field names are both accepted. Dates that
    fail to parse become ``None`` so the record resolves as indeterminate.
    """
    record_id = _first(mapping, "id", "grant_id", "grantId")
    return Grant(
        id=str(record_id or ""),
        title=str(mapping.get("title") or ""),
        reference=str(_first(mapping, "reference", "grant_id", "grantId") or record_id or ""),
        description=str(
            _first(mapping, "description", "quick_description", "quickDescription") or ""
        ),
        opens_at=parse_datetime_utc(_first(mapping, "opens_at", "opensAt", "open_date")),
        closes_at=parse_datetime_utc(_first(mapping, "closes_at", "closesAt", "close_date")),
        uses=_as_list(_first(mapping, "uses", "grant_use", "grantUse")),
        eligibility_requirements=_as_list(
            _first(mapping, "eligibility_requirements", "eligibilityRequirements", "eligibility")
        ),
        compatibility_tags=_as_list(
            _first(
                mapping,
                "compatibility_tags",
                "compatibilityTags",
                "insuranceCompatibility",
            )
        ),
        kind=_optional_str(_first(mapping, "kind", "grantType", "grant_type")),
        is_nationwide=_as_flag(_first(mapping, "is_nationwide", "isNationwide")),
        region=_optional_str(_first(mapping, "region", "state")),
        amount=_optional_str(mapping.get("amount")),
        link=_optional_str(mapping.get("link")),
    )


def provider_from_mapping(mapping: dict[str, Any]) -> Provider:
    return Provider(
        id=str(mapping.get("id") or mapping.get("name") or ""),
        name=str(mapping.get("name") or ""),
        rating=_as_float(mapping.get("rating")),
        response_hours=parse_response_hours(
            _first(mapping, "response_hours", "responseHours", "responseTime")
        ),
        specialties=_as_list(_first(mapping, "specialties", "specializations")),
        certifications=_as_list(mapping.get("certifications")),
        is_online=_as_flag(_first(mapping, "is_online", "isOnline")),
        role=str(mapping.get("role") or ""),
        location=str(mapping.get("location") or ""),
    )


def parse_response_hours(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)

    match = _FIRST_INTEGER.search(str(value))
    if match is None:
        return None
    return int(match.group(0))


def _first(mapping: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value if item is not None]


def _as_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value

    if isinstance(value, int) and value in {0, 1}:
        return bool(value)

    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "on"}

    return False


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


RECORD_BUILDERS = {
    "grant": grant_from_mapping,
    "provider": provider_from_mapping,
}
