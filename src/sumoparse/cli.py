"""CLI entry point and main processing flow."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from sumoparse.dictionaries import lookup_division
from sumoparse.fetch import fetch_with_cache, hoshitori_url, torikumi_url
from sumoparse.io_csv import matchup_filename, write_matchups_csv
from sumoparse.io_json import write_matchups_json
from sumoparse.models import Division, Wrestler, rank_label
from sumoparse.parse_hoshitori import parse_hoshitori_page
from sumoparse.parse_torikumi import check_page_day, parse_page_day, parse_torikumi_page
from sumoparse.roster import (
    DEFAULT_DATA_DIR,
    NameResolver,
    RosterCache,
    roster_path,
    save_roster,
)
from sumoparse.sorting import sort_wrestlers
from sumoparse.util import SumoparseError

logger = logging.getLogger("sumoparse")

CACHE_DIR = "cache"


def _division_arg(value: str) -> Division:
    try:
        return Division.from_label(value)
    except ValueError as e:
        division = lookup_division(value)
        if division is None:
            raise argparse.ArgumentTypeError(str(e)) from None
        return division


def _day_arg(value: str) -> int:
    try:
        day = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"day must be a number, got {value!r}") from None
    if not 1 <= day <= 15:
        raise argparse.ArgumentTypeError(f"day must be 1-15, got {day}")
    return day


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sumoparse",
        description="Parse Japan Sumo Association standings and bout tables.",
    )
    parser.add_argument(
        "--data-dir", type=Path, default=DEFAULT_DATA_DIR,
        help=f"Roster JSON and HTML cache directory (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--raw-cache", choices=["on", "off"], default="on",
        help="HTML cache mode (default: on)",
    )
    parser.add_argument(
        "--log-level", choices=["INFO", "DEBUG"], default="INFO",
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    division_help = "Division name (English or Japanese) or number (1-6)"

    stats = sub.add_parser("stats", help="Fetch standings and write the roster JSON")
    stats.add_argument("--division", type=_division_arg, required=True, help=division_help)

    matchups = sub.add_parser("matchups", help="Fetch a day's bouts and write CSV or JSON")
    matchups.add_argument("--division", type=_division_arg, required=True, help=division_help)
    matchups.add_argument("--day", type=_day_arg, required=True, help="Tournament day (1-15)")

    validate = sub.add_parser("validate", help="Check that a torikumi page shows the given day")
    validate.add_argument("--division", type=_division_arg, default=Division.MAKUUCHI,
                          help=division_help + " (default: 1)")
    validate.add_argument("--day", type=_day_arg, required=True, help="Tournament day (1-15)")

    sub.add_parser("process-all", help="Fetch standings for every division")

    process_day = sub.add_parser("process-day", help="Write a day's bouts for every division")
    process_day.add_argument("--day", type=_day_arg, required=True, help="Tournament day (1-15)")

    for p in (matchups, process_day):
        p.add_argument("--output-dir", type=Path, default=Path("output"),
                       help="Output directory (default: ./output)")
        p.add_argument("--format", choices=["csv", "json"], default="csv",
                       help="Output format (default: csv)")

    listing = sub.add_parser("list", help="Print a division roster in banzuke order")
    listing.add_argument("--division", type=_division_arg, required=True, help=division_help)
    listing.add_argument("--format", choices=["table", "json"], default="table",
                         help="Output format (default: table)")
    return parser


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def format_table(wrestlers: list[Wrestler]) -> str:
    lines = [f"{'Rank':<16} {'Side':<5} {'Name':<20} {'Kanji':<8} ID"]
    for w in wrestlers:
        rank = rank_label(w.current.rank) if w.current else "-"
        side = w.current.side.value if w.current else "-"
        lines.append(f"{rank:<16} {side:<5} {w.english_name:<20} {w.kanji_name:<8} {w.id}")
    return "\n".join(lines)


def run_stats(division: Division, data_dir: Path, use_cache: bool) -> Path:
    url = hoshitori_url(division)
    cache_path = data_dir / CACHE_DIR / f"hoshitori_{division.value}.html" if use_cache else None
    html = fetch_with_cache(url, cache_path, use_cache)
    wrestlers = parse_hoshitori_page(html, division)
    return save_roster(wrestlers, data_dir, division)


def _fetch_torikumi(division: Division, day: int, data_dir: Path, use_cache: bool) -> str:
    cache_path = (
        data_dir / CACHE_DIR / f"torikumi_{division.value}_d{day:02d}.html" if use_cache else None
    )
    return fetch_with_cache(torikumi_url(division, day), cache_path, use_cache)


def run_matchups(
    division: Division,
    day: int,
    data_dir: Path,
    output_dir: Path,
    use_cache: bool,
    fmt: str = "csv",
    cache: RosterCache | None = None,
) -> Path:
    html = _fetch_torikumi(division, day, data_dir, use_cache)
    for warning in check_page_day(parse_page_day(html), day):
        logger.warning("%s %s", division.label, warning)

    resolver = NameResolver(cache or RosterCache(data_dir))
    matchups = parse_torikumi_page(html, division, resolver)
    path = output_dir / matchup_filename(day, division, fmt)
    if fmt == "json":
        write_matchups_json(matchups, path, division, day)
    else:
        write_matchups_csv(matchups, path)
    return path


def run_validate(division: Division, day: int, data_dir: Path, use_cache: bool) -> list[str]:
    html = _fetch_torikumi(division, day, data_dir, use_cache)
    page = parse_page_day(html)
    logger.info("Page day: %s, date: %s, name: %s", page.day, page.date, page.day_name)
    return check_page_day(page, day)


def run_process_all(data_dir: Path, use_cache: bool) -> list[Path]:
    return [run_stats(division, data_dir, use_cache) for division in Division]


def run_process_day(
    day: int,
    data_dir: Path,
    output_dir: Path,
    use_cache: bool,
    fmt: str = "csv",
) -> list[Path]:
    """Write every division's bouts for one day, fetching any missing roster first."""
    for division in Division:
        if not roster_path(data_dir, division).exists():
            logger.info("No roster for %s, fetching standings", division.label)
            run_stats(division, data_dir, use_cache)

    cache = RosterCache(data_dir)
    return [
        run_matchups(division, day, data_dir, output_dir, use_cache, fmt, cache)
        for division in Division
    ]


def run_list(division: Division, data_dir: Path, fmt: str) -> str:
    cache = RosterCache(data_dir)
    wrestlers = sort_wrestlers(cache.get_or_load(division))
    if fmt == "json":
        return json.dumps([w.to_dict() for w in wrestlers], ensure_ascii=False, indent=2)
    return format_table(wrestlers)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.log_level)

    use_cache = args.raw_cache == "on"
    division: Division | None = getattr(args, "division", None)
    logger.info(
        "Starting sumoparse %s%s",
        args.command, f" for {division.label}" if division else "",
    )

    start_time = time.time()

    try:
        if args.command == "stats":
            path = run_stats(division, args.data_dir, use_cache)
            logger.info("Roster: %s", path)
        elif args.command == "matchups":
            path = run_matchups(
                division, args.day, args.data_dir, args.output_dir, use_cache, args.format,
            )
            logger.info("Matchups: %s", path)
        elif args.command == "validate":
            warnings = run_validate(division, args.day, args.data_dir, use_cache)
            for warning in warnings:
                print(f"WARNING: {warning}")
            print(f"Day {args.day}: {'OK' if not warnings else 'INVALID'}")
            if warnings:
                sys.exit(1)
        elif args.command == "process-all":
            paths = run_process_all(args.data_dir, use_cache)
            logger.info("Wrote %d rosters", len(paths))
        elif args.command == "process-day":
            paths = run_process_day(
                args.day, args.data_dir, args.output_dir, use_cache, args.format,
            )
            logger.info("Wrote %d matchup files", len(paths))
        else:
            print(run_list(division, args.data_dir, args.format))

        logger.info("Elapsed: %.1fs", time.time() - start_time)

    except SumoparseError as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        sys.exit(1)
