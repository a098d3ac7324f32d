"""CLI for PassQuality: score a password, build/check the top list database."""

import argparse
import json
import logging
import sqlite3
import sys

from rich import print
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import acceptable_threshold, load_config, toplist_db_path
from .evaluator import score
from .storage import build_from_seclist
from .toplists import KnownListTier, LookupUnavailable, SQLiteLookup, lookup_tier

EXIT_LOOKUP_UNAVAILABLE = 2

TIER_LABELS = {
    KnownListTier.TOP10: "Top 10",
    KnownListTier.TOP25: "Top 25",
    KnownListTier.TOP50: "Top 50",
    KnownListTier.NONE: "not listed",
}


def _db_path(args) -> str:
    return args.db or toplist_db_path(load_config())


def cmd_score(args) -> int:
    threshold = acceptable_threshold(load_config())
    try:
        report = score(args.password, SQLiteLookup(_db_path(args)))
    except LookupUnavailable as e:
        print(f"[red]Known password lookup unavailable: {e}[/red]")
        return EXIT_LOOKUP_UNAVAILABLE
    acceptable = report.is_acceptable(threshold)
    if args.json:
        out = report.to_dict()
        out["acceptable"] = acceptable
        sys.stdout.write(json.dumps(out) + "\n")
        return 0

    verdict = "[green]acceptable[/green]" if acceptable else "[red]weak[/red]"
    header = f"Quality: {report.quality} / 10 ({verdict})"
    body = (
        f"Length: {report.length}  Unique chars: {report.unique_count}\n"
        f"Lower: {report.lowercase}  Upper: {report.uppercase}  "
        f"Digits: {report.digits}  Other: {report.others}\n"
        f"Known list: {TIER_LABELS[report.top_list_tier]}"
    )
    print(Panel(body, title=header))
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Dimension")
    table.add_column("Quality", justify="right")
    table.add_row("Char diversity", str(report.char_diversity_quality))
    table.add_row("Char type diversity", str(report.char_type_diversity_quality))
    table.add_row("Length", str(report.length_quality))
    table.add_row("Known lists", str(report.known_quality))
    print(table)
    return 0

# Top list subcommands

def cmd_toplist_build(args) -> int:
    path = _db_path(args)
    try:
        build_from_seclist(path, args.source, sizes=(args.top10, args.top25, args.top50), encoding=args.encoding)
    except (OSError, ValueError, LookupError, sqlite3.Error) as e:
        print(f"[red]Failed to build top list database: {e}[/red]")
        return 1
    print(f"[green]Built top list database at:[/green] {path}")
    return 0

def cmd_toplist_check(args) -> int:
    try:
        tier = lookup_tier(args.password, SQLiteLookup(_db_path(args)))
    except LookupUnavailable as e:
        print(f"[red]Known password lookup unavailable: {e}[/red]")
        return EXIT_LOOKUP_UNAVAILABLE
    if tier is KnownListTier.NONE:
        print("[green]Password is not in any top list.[/green]")
    else:
        print(f"[yellow]Password is in the {TIER_LABELS[tier]} list.[/yellow]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="passquality")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sc = sub.add_parser("score", help="Score a password (0-10)")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.add_argument("--db", type=str, help="Path to top list database")
    sc.add_argument("--json", action="store_true", help="Print the report as JSON")
    sc.set_defaults(func=cmd_score)

    t = sub.add_parser("toplist", help="Top list database operations")
    tsub = t.add_subparsers(dest="tcmd", required=True)

    t_build = tsub.add_parser("build", help="Build the database from a ranked SecLists password file")
    t_build.add_argument("source", type=str, help="Password file, most common first")
    t_build.add_argument("--db", type=str, help="Path to top list database")
    t_build.add_argument("--top10", type=int, default=10, help="Entries in the Top 10 tier")
    t_build.add_argument("--top25", type=int, default=25, help="Entries in the Top 25 tier")
    t_build.add_argument("--top50", type=int, default=50, help="Entries in the Top 50 tier")
    t_build.add_argument("--encoding", type=str, default="utf-8", help="Text encoding of the source file")
    t_build.set_defaults(func=cmd_toplist_build)

    t_check = tsub.add_parser("check", help="Show which top list a password is in")
    t_check.add_argument("password", type=str, help="Password to look up")
    t_check.add_argument("--db", type=str, help="Path to top list database")
    t_check.set_defaults(func=cmd_toplist_check)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])
    return args.func(args)

if __name__ == "__main__":
    sys.exit(main())
