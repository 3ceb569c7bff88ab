from __future__ import annotations

from listing_finder.config import ProviderCriteria
from listing_finder.models import Provider

from .base import Filter, FilterResult, any_of, contains_text


class ProviderFilter(Filter):
    def __init__(self, criteria: ProviderCriteria) -> None:
        self.criteria = criteria

    def evaluate(self, record: Provider) -> FilterResult:
        criteria = self.criteria
        reasons: list[str] = []

        if criteria.min_rating > 0:
            if record.rating is None or record.rating < criteria.min_rating:
                return FilterResult(
                    matched=False,
                    reasons=[f"rating below {criteria.min_rating:g}"],
                )
            reasons.append(f"rating: {record.rating:g}")

        if criteria.max_response_hours is not None:
            if (
                record.response_hours is None
                or record.response_hours > criteria.max_response_hours
            ):
                return FilterResult(
                    matched=False,
                    reasons=[f"response time over {criteria.max_response_hours}h"],
                )
            reasons.append(f"responds within {record.response_hours}h")

        for label, selected, values in (
            ("specialties", criteria.specialties, record.specialties),
            ("certifications", criteria.certifications, record.certifications),
        ):
            if not any_of(selected, values):
                return FilterResult(matched=False, reasons=[f"{label} filter not matched"])
            if selected:
                reasons.append(f"{label}: {', '.join(sorted(selected & set(values or ())))}")

        if criteria.online_only and not record.is_online:
            return FilterResult(matched=False, reasons=["provider is offline"])

        search_text = criteria.search_text.strip()
        if search_text:
            if not contains_text(search_text, (record.name, record.id, record.role)):
                return FilterResult(matched=False, reasons=["search text not found"])
            reasons.append(f"search: {search_text}")

        if not reasons:
            reasons.append("matched default pass-through rules")

        return FilterResult(matched=True, reasons=reasons)
