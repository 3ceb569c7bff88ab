from __future__ import annotations

from datetime import datetime

from listing_finder.config import ALL, GrantCriteria
from listing_finder.models import Grant, RecordStatus
from listing_finder.status import status_of

from .base import Filter, FilterResult, any_of, contains_text

_KNOWN_STATUSES = {status.value.lower() for status in RecordStatus} - {
    RecordStatus.INDETERMINATE.value.lower()
}


class GrantFilter(Filter):
    """AND of every active grant sub-filter.

    Each check only ever returns early on a failure, so a matching search term
    never skips the facet, toggle or status checks.
    """

    def __init__(self, criteria: GrantCriteria, now: datetime) -> None:
        self.criteria = criteria
        self.now = now

    def evaluate(self, record: Grant) -> FilterResult:
        criteria = self.criteria
        reasons: list[str] = []

        wanted_status = (criteria.status or ALL).strip().lower()
        if wanted_status != ALL and wanted_status in _KNOWN_STATUSES:
            status = status_of(record, self.now)
            if status.value.lower() != wanted_status:
                return FilterResult(
                    matched=False,
                    reasons=[f"status {status.value} is not {criteria.status}"],
                )
            reasons.append(f"status: {status.value}")

        if (criteria.kind or ALL).strip().lower() != ALL:
            if record.kind != criteria.kind:
                return FilterResult(matched=False, reasons=["kind filter not matched"])
            reasons.append(f"kind: {record.kind}")

        for label, selected, values in (
            ("uses", criteria.uses, record.uses),
            ("eligibility", criteria.eligibility_requirements, record.eligibility_requirements),
            ("compatibility", criteria.compatibility_tags, record.compatibility_tags),
        ):
            if not any_of(selected, values):
                return FilterResult(matched=False, reasons=[f"{label} filter not matched"])
            if selected:
                reasons.append(f"{label}: {', '.join(sorted(selected & set(values or ())))}")

        if not criteria.include_broad_scope and record.is_nationwide:
            return FilterResult(matched=False, reasons=["nationwide results excluded"])

        search_text = criteria.search_text.strip()
        if search_text:
            if not contains_text(
                search_text,
                (record.title, record.reference, record.description),
            ):
                return FilterResult(matched=False, reasons=["search text not found"])
            reasons.append(f"search: {search_text}")

        if not reasons:
            reasons.append("matched default pass-through rules")

        return FilterResult(matched=True, reasons=reasons)
