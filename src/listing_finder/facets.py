from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

GRANT_FACETS = ("uses", "eligibility_requirements", "compatibility_tags", "kind")
PROVIDER_FACETS = ("specialties", "certifications")

FacetMap = dict[str, list[str]]


def build_facet_index(records: Iterable[Any], fields: Iterable[str]) -> FacetMap:
    """Collect the distinct values of each facet across the whole collection.

    Always pass the unfiltered collection: options offered for one facet must
    not shrink because another facet has a selection.
    """
    fields = tuple(fields)
    values: dict[str, set[str]] = {name: set() for name in fields}

    for record in records:
        for name in fields:
            values[name].update(_facet_values(record, name))

    return {name: sorted(found) for name, found in values.items()}


def count_facet_values(records: Iterable[Any], field_name: str) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for record in records:
        # a record contributes once per value even if listed twice
        counts.update(set(_facet_values(record, field_name)))
    return dict(sorted(counts.items()))


def _facet_values(record: Any, field_name: str) -> list[str]:
    value = getattr(record, field_name, None)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [item for item in value if isinstance(item, str)]
