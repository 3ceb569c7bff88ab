from __future__ import annotations

import logging
import unicodedata
from datetime import datetime
from typing import Any, Callable, Sequence, TypeVar

from listing_finder.models import RecordStatus, SortKey
from listing_finder.status import status_of
from listing_finder.utils.datetime_utils import to_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STATUS_PRIORITY = {
    RecordStatus.OPEN: 0,
    RecordStatus.UPCOMING: 1,
    RecordStatus.CLOSED: 2,
}
_UNRESOLVED_PRIORITY = len(_STATUS_PRIORITY)


def parse_sort_key(value: SortKey | str | None) -> SortKey | None:
    if isinstance(value, SortKey):
        return value
    if value is None:
        return None
    try:
        return SortKey(str(value).strip())
    except ValueError:
        return None


def sort_records(
    records: Sequence[T],
    sort_key: SortKey | str | None,
    now: datetime,
    *,
    unwrap: Callable[[T], Any] | None = None,
) -> list[T]:
    """Return a new list ordered by ``sort_key``.

    ``unwrap`` maps each item to the record whose fields drive the ordering,
    which lets ranked wrappers be sorted by the record they carry. Sorting is
    stable and an unrecognised key leaves the order untouched.
    """
    key = parse_sort_key(sort_key)
    get = unwrap or (lambda item: item)
    items = list(records)

    if key is None:
        if sort_key is not None:
            logger.debug("Ignoring unknown sort key %r", sort_key)
        return items

    if key in (SortKey.DATE_CLOSING_ASC, SortKey.DATE_CLOSING_DESC):
        dated = [item for item in items if _closes_at(get(item)) is not None]
        undated = [item for item in items if _closes_at(get(item)) is None]
        dated.sort(
            key=lambda item: _closes_at(get(item)),
            reverse=key is SortKey.DATE_CLOSING_DESC,
        )
        return dated + undated

    if key in (SortKey.TITLE_ASC, SortKey.TITLE_DESC):
        items.sort(
            key=lambda item: _collation_key(get(item)),
            reverse=key is SortKey.TITLE_DESC,
        )
        return items

    items.sort(
        key=lambda item: _STATUS_PRIORITY.get(status_of(get(item), now), _UNRESOLVED_PRIORITY)
    )
    return items


def _closes_at(record: Any) -> datetime | None:
    value = getattr(record, "closes_at", None)
    return to_utc(value) if isinstance(value, datetime) else None


def _collation_key(record: Any) -> tuple[str, str]:
    title = str(getattr(record, "display_title", "") or "")
    # accent- and case-insensitive, independent of the process locale
    decomposed = unicodedata.normalize("NFKD", title.casefold())
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base, title
