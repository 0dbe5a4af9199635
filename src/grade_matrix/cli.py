"""
Module: cli

Purpose:
    ``grade-matrix`` command line: export, import, summarize and paginate
    a gradebook file.

Commands:
    - export GRADEBOOK [-o OUT]: Write the CSV grades report
    - import GRADEBOOK CSV: Import a CSV file under the gradebook lock
    - summary GRADEBOOK: Per-student totals and the released average
    - paginate GRADEBOOK [--per-page N]: Alphabetical page labels

Exit Status:
    0 on success, 1 on errors, 2 when an import rejected lines

Dependencies:
    - argparse (std)
    - store.gradebook_file, exchange, aggregation, pagination
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from grade_matrix import __version__
from grade_matrix.aggregation import released_average, total_mark, total_percent
from grade_matrix.config import GradeMatrixConfig, load_config
from grade_matrix.core.models import Present
from grade_matrix.errors import GradeMatrixError
from grade_matrix.exchange import ImportResult, import_csv, to_csv
from grade_matrix.logging_utils import configure_logging
from grade_matrix.pagination import alpha_paginate
from grade_matrix.store import GradeMatrixStore, load_gradebook, update_gradebook

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grade-matrix",
        description="Aggregate, export and import grade entry forms",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="JSON configuration file")
    parser.add_argument("--log-level", help="Override the configured log level (e.g. DEBUG)")

    commands = parser.add_subparsers(dest="command", required=True)

    export = commands.add_parser("export", help="Write the CSV grades report")
    export.add_argument("gradebook", type=Path, help="Gradebook JSON file")
    export.add_argument("--output", "-o", type=Path, help="Output CSV file (default: stdout)")

    importer = commands.add_parser("import", help="Import grades from a CSV file")
    importer.add_argument("gradebook", type=Path, help="Gradebook JSON file to update")
    importer.add_argument("csv_file", type=Path, help="CSV file to import")

    summary = commands.add_parser("summary", help="Show totals and the released average")
    summary.add_argument("gradebook", type=Path, help="Gradebook JSON file")

    paginate = commands.add_parser("paginate", help="Show alphabetical page labels")
    paginate.add_argument("gradebook", type=Path, help="Gradebook JSON file")
    paginate.add_argument("--per-page", type=int, help="Students per page (default from config)")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        if args.log_level:
            config = replace(config, log_level=args.log_level.upper())
    except (GradeMatrixError, ValueError) as e:
        parser.error(str(e))

    configure_logging(config.level)

    handlers = {
        "export": _run_export,
        "import": _run_import,
        "summary": _run_summary,
        "paginate": _run_paginate,
    }
    try:
        return handlers[args.command](args, config)
    except (GradeMatrixError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def _run_export(args: argparse.Namespace, config: GradeMatrixConfig) -> int:
    store = load_gradebook(args.gradebook)
    text = to_csv(store.form, store.directory.list_visible())

    if args.output:
        args.output.write_text(text, encoding=config.encoding, newline="")
        logger.info(f"Wrote {args.output}")
    else:
        sys.stdout.write(text)
    return 0


def _run_import(args: argparse.Namespace, config: GradeMatrixConfig) -> int:
    with open(args.csv_file, "r", encoding=config.encoding, newline="") as f:
        result: ImportResult = update_gradebook(
            args.gradebook,
            lambda store: import_csv(f, store.form, store.item_sync, store.row_sync),
        )

    print(f"{result.update_count} updates applied")
    if result.ok:
        return 0

    print(f"{len(result.invalid_lines)} invalid lines:")
    for line in result.invalid_lines:
        print(f"  {line}")
    return 2


def _run_summary(args: argparse.Namespace, config: GradeMatrixConfig) -> int:
    store = load_gradebook(args.gradebook)
    form = store.form

    print(f"Form {form.identifier}")
    for student in store.directory.list_visible():
        total = total_mark(form, student.user_name)
        percent = total_percent(form, student.user_name)
        print(f"  {student.user_name}: {_display(total)} ({_display(percent, suffix='%')})")

    print(f"Released average: {released_average(form):.2f}%")
    return 0


def _run_paginate(args: argparse.Namespace, config: GradeMatrixConfig) -> int:
    store = load_gradebook(args.gradebook)
    per_page = args.per_page or config.per_page

    students = _sorted_by_last_name(store)
    labels = alpha_paginate(students, per_page, key=lambda s: s.last_name or s.user_name)
    for page, label in enumerate(labels, start=1):
        print(f"Page {page}: {label}")
    return 0


def _sorted_by_last_name(store: GradeMatrixStore) -> List:
    return sorted(
        store.directory.list_visible(),
        key=lambda s: (s.last_name or s.user_name, s.user_name),
    )


def _display(mark, suffix: str = "") -> str:
    if isinstance(mark, Present):
        return f"{mark}{suffix}"
    return "-"


if __name__ == "__main__":
    raise SystemExit(main())
