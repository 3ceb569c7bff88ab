"""Filter implementations."""

from .base import Filter, FilterResult
from .compiler import Predicate, build_filter, compile_predicate
from .grant_filter import GrantFilter
from .provider_filter import ProviderFilter

__all__ = [
    "Filter",
    "FilterResult",
    "GrantFilter",
    "Predicate",
    "ProviderFilter",
    "build_filter",
    "compile_predicate",
]
