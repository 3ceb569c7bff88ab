from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Sequence

from listing_finder.config import FilterCriteria, GrantCriteria
from listing_finder.facets import GRANT_FACETS, PROVIDER_FACETS, FacetMap, build_facet_index
from listing_finder.filters import build_filter
from listing_finder.models import RecordStatus
from listing_finder.scoring import calculate_match_score
from listing_finder.sorting import sort_records
from listing_finder.status import status_of, time_remaining

logger = logging.getLogger(__name__)
_NON_DIGITS = re.compile(r"\D")

Scorer = Callable[[Any, datetime], int]


@dataclass(frozen=True, slots=True)
class RecordProfile:
    facet_fields: tuple[str, ...]
    scorer: Scorer | None = None


PROFILES: dict[str, RecordProfile] = {
    "grant": RecordProfile(facet_fields=GRANT_FACETS, scorer=calculate_match_score),
    "provider": RecordProfile(facet_fields=PROVIDER_FACETS),
}


@dataclass(frozen=True, slots=True)
class RankedRecord:
    record: Any
    status: RecordStatus
    score: int | None = None
    time_remaining: str | None = None


@dataclass(slots=True)
class PipelineResult:
    results: list[RankedRecord]
    facets: FacetMap = field(default_factory=dict)

    @property
    def records(self) -> list[Any]:
        return [item.record for item in self.results]


@dataclass(slots=True)
class CollectionStats:
    total: int = 0
    open: int = 0
    upcoming: int = 0
    closed: int = 0
    indeterminate: int = 0
    total_amount: int = 0


class FilterPipeline:
    """Holds a snapshot collection and its facet index.

    Facets are rebuilt only when the collection is replaced. ``apply`` never
    mutates the pipeline, the records, or the criteria.
    """

    def __init__(self, collection: Iterable[Any], kind: str) -> None:
        if kind not in PROFILES:
            raise ValueError(f"Unknown record kind '{kind}'")
        self.kind = kind
        self.profile = PROFILES[kind]
        self.collection: list[Any] = []
        self.facets: FacetMap = {}
        self.replace_collection(collection)

    def replace_collection(self, collection: Iterable[Any]) -> None:
        self.collection = list(collection)
        self.facets = build_facet_index(self.collection, self.profile.facet_fields)
        logger.debug(
            "Indexed %d %s records across %d facets",
            len(self.collection),
            self.kind,
            len(self.facets),
        )

    def apply(self, criteria: FilterCriteria, now: datetime) -> PipelineResult:
        results = _rank(self.collection, criteria, now, self.profile.scorer)
        return PipelineResult(
            results=results,
            facets={name: list(values) for name, values in self.facets.items()},
        )


def kind_for(criteria: FilterCriteria) -> str:
    return "grant" if isinstance(criteria, GrantCriteria) else "provider"


def apply(collection: Sequence[Any], criteria: FilterCriteria, now: datetime) -> PipelineResult:
    return FilterPipeline(collection, kind_for(criteria)).apply(criteria, now)


def summarize(records: Iterable[Any], now: datetime) -> CollectionStats:
    stats = CollectionStats()
    for record in records:
        stats.total += 1
        status = status_of(record, now)
        if status is RecordStatus.OPEN:
            stats.open += 1
        elif status is RecordStatus.UPCOMING:
            stats.upcoming += 1
        elif status is RecordStatus.CLOSED:
            stats.closed += 1
        else:
            stats.indeterminate += 1
        stats.total_amount += _amount_value(getattr(record, "amount", None))
    return stats


def _rank(
    collection: Sequence[Any],
    criteria: FilterCriteria,
    now: datetime,
    scorer: Scorer | None,
) -> list[RankedRecord]:
    predicate = build_filter(criteria, now)
    min_score = getattr(criteria, "min_score", 0) or 0

    ranked: list[RankedRecord] = []
    filtered_out = 0
    below_score = 0
    for record in collection:
        if not predicate.matches(record):
            filtered_out += 1
            continue

        score = scorer(record, now) if scorer is not None else None
        if score is not None and min_score > 0 and score < min_score:
            below_score += 1
            continue

        ranked.append(
            RankedRecord(
                record=record,
                status=status_of(record, now),
                score=score,
                time_remaining=time_remaining(getattr(record, "closes_at", None), now),
            )
        )

    logger.debug(
        "Pipeline run | input=%d kept=%d filtered_out=%d below_min_score=%d",
        len(collection),
        len(ranked),
        filtered_out,
        below_score,
    )
    return sort_records(ranked, criteria.sort_key, now, unwrap=lambda item: item.record)


def _amount_value(amount: str | None) -> int:
    digits = _NON_DIGITS.sub("", amount or "")
    return int(digits) if digits else 0
