from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from listing_finder.models import RecordStatus
from listing_finder.status import resolve_status, status_of, time_remaining

from conftest import NOW, make_grant, make_provider

OPENS = datetime(2025, 1, 1, tzinfo=timezone.utc)
CLOSES = datetime(2025, 12, 31, tzinfo=timezone.utc)


def test_status_is_open_inside_window() -> None:
    assert resolve_status(OPENS, CLOSES, NOW) is RecordStatus.OPEN


@pytest.mark.parametrize(
    ("now", "expected"),
    [
        (OPENS - timedelta(seconds=1), RecordStatus.UPCOMING),
        (OPENS, RecordStatus.OPEN),
        (CLOSES, RecordStatus.OPEN),
        (CLOSES + timedelta(seconds=1), RecordStatus.CLOSED),
    ],
)
def test_status_boundaries_are_inclusive(now: datetime, expected: RecordStatus) -> None:
    assert resolve_status(OPENS, CLOSES, now) is expected


def test_status_is_indeterminate_for_missing_or_inverted_dates() -> None:
    assert resolve_status(None, CLOSES, NOW) is RecordStatus.INDETERMINATE
    assert resolve_status(OPENS, None, NOW) is RecordStatus.INDETERMINATE
    assert resolve_status(CLOSES, OPENS, NOW) is RecordStatus.INDETERMINATE


def test_status_does_not_raise_on_naive_reference_time() -> None:
    naive_now = datetime(2025, 6, 1)

    assert resolve_status(OPENS, CLOSES, naive_now) is RecordStatus.INDETERMINATE


def test_status_of_reads_record_dates() -> None:
    assert status_of(make_grant(), NOW) is RecordStatus.OPEN
    assert status_of(make_grant(opens_at=None), NOW) is RecordStatus.INDETERMINATE
    assert status_of(make_provider(), NOW) is RecordStatus.INDETERMINATE


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(days=-1), None),
        (timedelta(0), "Closes today!"),
        (timedelta(hours=20), "1 day remaining"),
        (timedelta(days=1), "1 day remaining"),
        (timedelta(days=5), "5 days remaining"),
        (timedelta(days=7), "7 days remaining"),
        (timedelta(days=8), "2 weeks remaining"),
        (timedelta(days=30), "5 weeks remaining"),
        (timedelta(days=31), None),
    ],
)
def test_time_remaining_buckets(delta: timedelta, expected: str | None) -> None:
    assert time_remaining(NOW + delta, NOW) == expected


def test_time_remaining_without_closing_date() -> None:
    assert time_remaining(None, NOW) is None
