from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from listing_finder.config import AppConfig, ConfigError, load_config
from listing_finder.logging_config import setup_logging
from listing_finder.models import SortKey
from listing_finder.pipeline import FilterPipeline, RankedRecord, summarize
from listing_finder.sources import Source, create_source
from listing_finder.utils.datetime_utils import format_date, parse_datetime_utc

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listing-finder",
        description="Filter, score and rank grants or professionals from configured sources.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.yaml",
        help="Path to config YAML file (default: config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        help="Override config log level (e.g. INFO, DEBUG)",
    )
    parser.add_argument(
        "--now",
        help="Reference time as an ISO date (default: current UTC time)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    search = subparsers.add_parser("search", help="Print ranked records matching the criteria")
    search.add_argument("-q", "--query", help="Override the configured search text")
    search.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        help="Override the configured sort key",
    )
    subparsers.add_parser("facets", help="Print facet values across the whole collection")
    subparsers.add_parser("stats", help="Print status counts for the collection")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = load_config(args.config)
    except ConfigError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 2

    log_level = args.log_level or app_config.log_level
    setup_logging(log_level)

    now = datetime.now(timezone.utc)
    if args.now:
        parsed_now = parse_datetime_utc(args.now)
        if parsed_now is None:
            parser.error(f"--now is not a valid date: {args.now}")
        now = parsed_now

    records = _fetch_all(_build_sources(app_config))
    if records is None:
        return 1

    if args.command == "stats":
        stats = summarize(records, now)
        print(
            f"total={stats.total} open={stats.open} upcoming={stats.upcoming} "
            f"closed={stats.closed} indeterminate={stats.indeterminate} "
            f"total_amount={stats.total_amount}"
        )
        return 0

    pipeline = FilterPipeline(records, app_config.kind)

    if args.command == "facets":
        for name, values in pipeline.facets.items():
            print(f"{name}: {', '.join(values) if values else '-'}")
        return 0

    criteria = app_config.criteria
    if args.query is not None:
        criteria.search_text = args.query
    if args.sort is not None:
        criteria.sort_key = SortKey(args.sort)

    result = pipeline.apply(criteria, now)
    logger.info(
        "Search complete | total=%d shown=%d active_filters=%d",
        len(records),
        len(result.results),
        criteria.active_filter_count(),
    )
    for ranked in result.results:
        print(render_ranked_line(ranked))
    return 0


def render_ranked_line(ranked: RankedRecord) -> str:
    record = ranked.record
    parts = [record.display_title, ranked.status.value]
    if ranked.score is not None:
        parts.append(f"{ranked.score}% match")
    closes_at = getattr(record, "closes_at", None)
    if closes_at is not None:
        parts.append(f"Closes: {format_date(closes_at)}")
    if ranked.time_remaining:
        parts.append(ranked.time_remaining)
    rating = getattr(record, "rating", None)
    if rating is not None:
        parts.append(f"Rating: {rating:g}")
    return " | ".join(parts)


def _build_sources(app_config: AppConfig) -> list[Source]:
    return [create_source(settings, app_config.kind) for settings in app_config.sources]


def _fetch_all(sources: list[Source]) -> list[Any] | None:
    records: list[Any] = []
    failed = False
    for source in sources:
        try:
            fetched = source.fetch()
        except Exception as exc:  # noqa: BLE001
            failed = True
            logger.exception("source %s fetch failed: %s", source.source_id, exc)
            continue
        logger.info("Source %s returned %d records", source.source_id, len(fetched))
        records.extend(fetched)
    return None if failed else records


if __name__ == "__main__":
    raise SystemExit(main())
