from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from listing_finder.config import FilterCriteria, GrantCriteria, ProviderCriteria

from .base import Filter
from .grant_filter import GrantFilter
from .provider_filter import ProviderFilter

Predicate = Callable[[Any], bool]


def build_filter(criteria: FilterCriteria, now: datetime) -> Filter:
    if isinstance(criteria, GrantCriteria):
        return GrantFilter(criteria, now)
    if isinstance(criteria, ProviderCriteria):
        return ProviderFilter(criteria)
    raise TypeError(f"Unsupported criteria type: {type(criteria)!r}")


def compile_predicate(criteria: FilterCriteria, now: datetime) -> Predicate:
    return build_filter(criteria, now).matches
