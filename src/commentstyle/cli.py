from __future__ import annotations

import argparse
import json
import sys

from loguru import logger

from .analyzer import DEFAULT_TAB_WIDTH, AnalysisOptions
from .api import DEFAULT_EXTENSIONS, collect_files, lint_files
from .errors import SourceError
from .rules import RULES


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format="{level}: {message}")


def _print_rules() -> None:
    for r in RULES:
        print(f"{r.id:<28} {r.category:<9} {r.severity.value:<8} {r.title}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="commentstyle",
        description="Check commenting conventions in C-family source files",
    )
    ap.add_argument("paths", nargs="*", help="Files or directories to check")
    ap.add_argument(
        "--ext",
        action="append",
        default=[],
        help=f"File extension to pick up in directories (repeatable, default {' '.join(DEFAULT_EXTENSIONS)})",
    )
    ap.add_argument(
        "--tab-width",
        type=int,
        default=DEFAULT_TAB_WIDTH,
        help="Columns a tab counts for when measuring trailing comment spacing",
    )
    ap.add_argument(
        "--include-generated",
        action="store_true",
        help="Also check generated sources (*.g.cs, *.Designer.cs, <auto-generated> headers)",
    )
    ap.add_argument("-j", "--jobs", type=int, default=1, help="Files to analyse in parallel")
    ap.add_argument("--json", action="store_true", help="Print diagnostics as JSON")
    ap.add_argument("--list-rules", action="store_true", help="Print the rules and exit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    args = ap.parse_args(argv)

    _configure_logging(args.verbose)

    if args.list_rules:
        _print_rules()
        return 0
    if not args.paths:
        ap.error("at least one path is required")
    if args.tab_width < 1:
        ap.error("--tab-width must be positive")

    try:
        files = collect_files(
            args.paths,
            extensions=args.ext or DEFAULT_EXTENSIONS,
            include_generated=args.include_generated,
        )
        res = lint_files(
            files,
            options=AnalysisOptions(tab_width=args.tab_width),
            jobs=max(args.jobs, 1),
            include_generated=args.include_generated,
        )
    except SourceError as e:
        print(str(e), file=sys.stderr)
        return 2
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 2

    if args.json:
        payload = {
            "files": list(res.files),
            "diagnostics": [d.to_dict() for d in res.diagnostics],
            "unreadable": list(res.unreadable),
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        for d in res.diagnostics:
            print(d.format())
    if res.unreadable:
        return 2
    return 0 if res.ok else 1
