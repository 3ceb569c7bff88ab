from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from listing_finder.models import SortKey

ALL = "all"
RECORD_KINDS = ("grant", "provider")


class ConfigError(ValueError):
    """Raised when configuration is invalid."""


@dataclass(slots=True)
class SourceSettings:
    id: str
    type: str
    location: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class GrantCriteria:
    search_text: str = ""
    status: str = ALL
    kind: str = ALL
    uses: set[str] = field(default_factory=set)
    eligibility_requirements: set[str] = field(default_factory=set)
    compatibility_tags: set[str] = field(default_factory=set)
    min_score: int = 0
    include_broad_scope: bool = True
    sort_key: SortKey | str = SortKey.DATE_CLOSING_DESC

    def active_filter_count(self) -> int:
        count = len(self.uses) + len(self.eligibility_requirements) + len(self.compatibility_tags)
        count += int(self.status.strip().lower() != ALL)
        count += int(self.kind.strip().lower() != ALL)
        count += int(self.min_score > 0)
        count += int(not self.include_broad_scope)
        return count

    def reset(self) -> None:
        _reset(self)


@dataclass(slots=True)
class ProviderCriteria:
    search_text: str = ""
    min_rating: float = 0.0
    max_response_hours: int | None = None
    specialties: set[str] = field(default_factory=set)
    certifications: set[str] = field(default_factory=set)
    online_only: bool = False
    sort_key: SortKey | str = SortKey.TITLE_ASC

    def active_filter_count(self) -> int:
        count = len(self.specialties) + len(self.certifications)
        count += int(self.min_rating > 0)
        count += int(self.max_response_hours is not None)
        count += int(self.online_only)
        return count

    def reset(self) -> None:
        _reset(self)


FilterCriteria = GrantCriteria | ProviderCriteria


@dataclass(slots=True)
class AppConfig:
    kind: str
    sources: list[SourceSettings]
    criteria: FilterCriteria
    log_level: str = "INFO"


def _reset(criteria: FilterCriteria) -> None:
    defaults = type(criteria)()
    for item in fields(criteria):
        setattr(criteria, item.name, getattr(defaults, item.name))


def _as_selection(value: Any, *, field_name: str) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, str):
        # facet values are compared verbatim, only the sentinel is recognised
        return set() if value.strip().lower() == ALL else {value}
    if isinstance(value, (list, tuple, set)):
        return {str(item) for item in value}
    raise ConfigError(f"{field_name} must be a string or a list of strings")


def _as_bool(value: Any, *, field_name: str) -> bool:
    if isinstance(value, bool):
        return value

    if isinstance(value, int) and value in {0, 1}:
        return bool(value)

    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"true", "1", "yes", "on"}:
            return True
        if normalized in {"false", "0", "no", "off"}:
            return False

    raise ConfigError(f"{field_name} must be a boolean")


def _as_int(
    value: Any,
    *,
    field_name: str,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be an integer")

    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc

    if minimum is not None and parsed < minimum:
        raise ConfigError(f"{field_name} must be >= {minimum}")
    if maximum is not None and parsed > maximum:
        raise ConfigError(f"{field_name} must be <= {maximum}")
    return parsed


def _as_float(value: Any, *, field_name: str, minimum: float, maximum: float) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a number")

    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be a number") from exc

    if not minimum <= parsed <= maximum:
        raise ConfigError(f"{field_name} must be between {minimum} and {maximum}")
    return parsed


def _as_sort_key(value: Any) -> SortKey | str:
    text = str(value).strip()
    try:
        return SortKey(text)
    except ValueError:
        # stale keys are kept and ignored by the sorter
        return text


def _get(raw: dict[str, Any], snake: str, camel: str) -> Any:
    if snake in raw:
        return raw[snake]
    return raw.get(camel)


def parse_criteria(kind: str, raw: dict[str, Any] | None) -> FilterCriteria:
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError("criteria must be a mapping")

    if kind == "grant":
        criteria: FilterCriteria = GrantCriteria()
    elif kind == "provider":
        criteria = ProviderCriteria()
    else:
        raise ConfigError(f"Unknown record kind '{kind}'. Expected one of: {', '.join(RECORD_KINDS)}")

    search_text = _get(raw, "search_text", "searchText")
    if search_text is not None:
        criteria.search_text = str(search_text)

    sort_key = _get(raw, "sort_key", "sortKey")
    if sort_key is not None:
        criteria.sort_key = _as_sort_key(sort_key)

    if isinstance(criteria, GrantCriteria):
        if raw.get("status") is not None:
            criteria.status = str(raw["status"]).strip()
        if raw.get("kind") is not None:
            criteria.kind = str(raw["kind"])
        for name, camel in (
            ("uses", "uses"),
            ("eligibility_requirements", "eligibilityRequirements"),
            ("compatibility_tags", "compatibilityTags"),
        ):
            setattr(
                criteria,
                name,
                _as_selection(_get(raw, name, camel), field_name=f"criteria.{name}"),
            )
        min_score = _get(raw, "min_score", "minScore")
        if min_score is not None:
            criteria.min_score = _as_int(
                min_score,
                field_name="criteria.min_score",
                minimum=0,
                maximum=100,
            )
        include_broad = _get(raw, "include_broad_scope", "includeBroadScope")
        if include_broad is not None:
            criteria.include_broad_scope = _as_bool(
                include_broad,
                field_name="criteria.include_broad_scope",
            )
        return criteria

    min_rating = _get(raw, "min_rating", "minRating")
    if min_rating is not None:
        criteria.min_rating = _as_float(
            min_rating,
            field_name="criteria.min_rating",
            minimum=0.0,
            maximum=5.0,
        )
    max_hours = _get(raw, "max_response_hours", "maxResponseHours")
    if max_hours is not None and str(max_hours).strip().lower() != ALL:
        criteria.max_response_hours = _as_int(
            max_hours,
            field_name="criteria.max_response_hours",
            minimum=0,
        )
    criteria.specialties = _as_selection(raw.get("specialties"), field_name="criteria.specialties")
    criteria.certifications = _as_selection(
        raw.get("certifications"),
        field_name="criteria.certifications",
    )
    online_only = _get(raw, "online_only", "onlineOnly")
    if online_only is not None:
        criteria.online_only = _as_bool(online_only, field_name="criteria.online_only")
    return criteria


def _resolve_relative_path(config_path: Path, raw_path: str) -> str:
    candidate = Path(raw_path).expanduser()
    if candidate.is_absolute():
        return str(candidate)
    return str((config_path.parent / candidate).resolve())


def load_config(path: str | Path) -> AppConfig:
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle) or {}

    if not isinstance(parsed, dict):
        raise ConfigError("Config root must be a mapping")

    kind = str(parsed.get("kind", "grant")).strip().lower()
    if kind not in RECORD_KINDS:
        raise ConfigError(f"kind must be one of: {', '.join(RECORD_KINDS)}")

    raw_sources = parsed.get("sources", [])
    if not isinstance(raw_sources, list) or not raw_sources:
        raise ConfigError("Config must define at least one source")

    sources: list[SourceSettings] = []
    for index, source in enumerate(raw_sources, start=1):
        if not isinstance(source, dict):
            raise ConfigError(f"Source entry #{index} must be a mapping")

        source_id = str(source.get("id", "")).strip()
        source_type = str(source.get("type", "")).strip()
        location = str(source.get("path") or source.get("url") or "").strip()
        if not source_id or not source_type or not location:
            raise ConfigError(f"Source entry #{index} missing one of: id, type, path/url")

        if "path" in source:
            location = _resolve_relative_path(config_path, location)

        options = {
            key: value
            for key, value in source.items()
            if key not in {"id", "type", "path", "url"}
        }

        sources.append(
            SourceSettings(
                id=source_id,
                type=source_type,
                location=location,
                options=options,
            )
        )

    return AppConfig(
        kind=kind,
        sources=sources,
        criteria=parse_criteria(kind, parsed.get("criteria")),
        log_level=str(parsed.get("log_level", "INFO")).upper(),
    )
