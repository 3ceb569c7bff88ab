from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any

from listing_finder.models import RecordStatus

_ONE_DAY = timedelta(days=1)


def resolve_status(
    opens_at: datetime | None,
    closes_at: datetime | None,
    now: datetime,
) -> RecordStatus:
    """Derive the lifecycle status of a dated record at ``now``.

    Both boundaries are inclusive. Missing dates and inverted windows resolve
    to ``INDETERMINATE`` instead of raising.
    """
    if opens_at is None or closes_at is None:
        return RecordStatus.INDETERMINATE

    try:
        if opens_at > closes_at:
            return RecordStatus.INDETERMINATE
        if now < opens_at:
            return RecordStatus.UPCOMING
        if now > closes_at:
            return RecordStatus.CLOSED
    except TypeError:
        # naive vs aware comparison
        return RecordStatus.INDETERMINATE

    return RecordStatus.OPEN


def status_of(record: Any, now: datetime) -> RecordStatus:
    return resolve_status(
        getattr(record, "opens_at", None),
        getattr(record, "closes_at", None),
        now,
    )


def time_remaining(closes_at: datetime | None, now: datetime) -> str | None:
    if closes_at is None:
        return None

    try:
        days = math.ceil((closes_at - now) / _ONE_DAY)
    except TypeError:
        return None

    if days < 0:
        return None
    if days == 0:
        return "Closes today!"
    if days == 1:
        return "1 day remaining"
    if days <= 7:
        return f"{days} days remaining"
    if days <= 30:
        return f"{math.ceil(days / 7)} weeks remaining"
    return None
