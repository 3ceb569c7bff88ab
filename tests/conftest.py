from __future__ import annotations

from datetime import datetime, timezone

import pytest

from listing_finder.models import Grant, Provider

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def make_grant(**overrides: object) -> Grant:
    base = Grant(
        id="1",
        title="Home Repair Assistance",
        reference="HRA-2025-001",
        description="Grants for critical home repairs",
        opens_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        closes_at=datetime(2025, 12, 31, tzinfo=timezone.utc),
        uses=["Home Repair"],
        eligibility_requirements=["Homeowner", "Income Limits", "Owner-Occupied"],
        compatibility_tags=["Homeowners"],
        kind="Federal",
        is_nationwide=False,
        amount="$10,000",
    )
    for key, value in overrides.items():
        setattr(base, key, value)
    return base


def make_provider(**overrides: object) -> Provider:
    base = Provider(
        id="sarah-johnson",
        name="Sarah Johnson",
        rating=4.9,
        response_hours=2,
        specialties=["Residential", "Roofing"],
        certifications=["ASHI Certified"],
        is_online=True,
        role="Senior Property Inspector",
        location="San Francisco, CA",
    )
    for key, value in overrides.items():
        setattr(base, key, value)
    return base


@pytest.fixture
def now() -> datetime:
    return NOW
