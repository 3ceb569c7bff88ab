from __future__ import annotations

import pytest

from listing_finder.config import (
    ConfigError,
    GrantCriteria,
    ProviderCriteria,
    load_config,
    parse_criteria,
)
from listing_finder.models import SortKey


def test_parse_grant_criteria_accepts_camel_case_keys() -> None:
    criteria = parse_criteria(
        "grant",
        {
            "searchText": "roof",
            "status": "open",
            "uses": ["Home Repair", "Solar"],
            "eligibilityRequirements": "Homeowner",
            "compatibilityTags": "all",
            "minScore": 80,
            "includeBroadScope": "no",
            "sortKey": "statusPriority",
        },
    )

    assert isinstance(criteria, GrantCriteria)
    assert criteria.search_text == "roof"
    assert criteria.uses == {"Home Repair", "Solar"}
    assert criteria.eligibility_requirements == {"Homeowner"}
    assert criteria.compatibility_tags == set()
    assert criteria.min_score == 80
    assert criteria.include_broad_scope is False
    assert criteria.sort_key is SortKey.STATUS_PRIORITY


def test_parse_criteria_keeps_stale_sort_key() -> None:
    criteria = parse_criteria("grant", {"sort_key": "date-desc"})

    assert criteria.sort_key == "date-desc"


def test_parse_provider_criteria() -> None:
    criteria = parse_criteria(
        "provider",
        {
            "min_rating": 4.5,
            "maxResponseHours": "2",
            "specialties": ["Roofing"],
            "online_only": True,
        },
    )

    assert isinstance(criteria, ProviderCriteria)
    assert criteria.min_rating == 4.5
    assert criteria.max_response_hours == 2
    assert criteria.specialties == {"Roofing"}
    assert criteria.online_only is True
    assert criteria.sort_key is SortKey.TITLE_ASC


@pytest.mark.parametrize(
    ("kind", "raw", "message"),
    [
        ("grant", {"min_score": 150}, "must be <= 100"),
        ("grant", {"include_broad_scope": "maybe"}, "must be a boolean"),
        ("provider", {"min_rating": 7}, "between"),
        ("vehicle", {}, "Unknown record kind"),
    ],
)
def test_parse_criteria_rejects_invalid_values(kind: str, raw: dict, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        parse_criteria(kind, raw)


def test_active_filter_count_and_reset() -> None:
    criteria = GrantCriteria(
        status="open",
        uses={"Solar", "Home Repair"},
        min_score=60,
        include_broad_scope=False,
    )

    assert criteria.active_filter_count() == 5

    criteria.reset()

    assert criteria == GrantCriteria()
    assert criteria.active_filter_count() == 0


def test_provider_active_filter_count() -> None:
    criteria = ProviderCriteria(min_rating=4.5, max_response_hours=2, certifications={"ARM"})

    assert criteria.active_filter_count() == 3


def test_load_config_resolves_file_paths(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "\n".join(
            [
                "kind: provider",
                "log_level: debug",
                "sources:",
                "  - id: agents",
                "    type: file",
                "    path: data/agents.yaml",
                "criteria:",
                "  minRating: 4.8",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.kind == "provider"
    assert config.log_level == "DEBUG"
    assert config.sources[0].location == str((tmp_path / "data" / "agents.yaml").resolve())
    assert config.criteria.min_rating == 4.8


def test_load_config_requires_sources(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("kind: grant\nsources: []\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="at least one source"):
        load_config(config_path)


def test_load_config_missing_file(tmp_path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")
