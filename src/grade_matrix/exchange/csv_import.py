"""
Module: exchange.csv_import

Purpose:
    Parse a grades CSV file back into item definitions and per-student
    grade rows. Malformed lines are collected with a reason instead of
    aborting the import.

Key Functions:
    - parse_csv(): Import and return the number of successful updates
    - import_csv(): Import and return an ImportResult

Protocol:
    1. Line 1 is read as the item-name header, line 2 as the item totals.
       Each is exactly one physical line; a blank header line is still
       consumed but does not count as read.
    2. The header pair goes to ItemSync (one update on success).
    3. Every further non-blank record is a grade row for StudentRowSync,
       applied only once more than one line has been read.

Dependencies:
    - csv (std)
    - store.interfaces: ItemSync, StudentRowSync
    - exchange.results: RowResult, ImportResult

Used By:
    - cli: import command
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from grade_matrix.core.models import Form
from grade_matrix.errors import ItemSyncError, RowSyncError
from grade_matrix.store.interfaces import ItemSync, StudentRowSync

from .results import ImportResult, RowResult

logger = logging.getLogger(__name__)


def parse_csv(
    lines: Iterable[str],
    form: Form,
    item_sync: ItemSync,
    row_sync: StudentRowSync,
    invalid_lines: Optional[List[str]] = None,
) -> int:
    """
    Parse a grade entry form CSV file.

    Args:
        lines: CSV text, one line per element (an open file works)
        form: Form being updated
        item_sync: Collaborator applying the header rows
        row_sync: Collaborator applying grade rows
        invalid_lines: If given, every rejected line is appended here as
            "<line>: <reason>"

    Returns:
        Number of successful updates
    """
    sink: List[str] = invalid_lines if invalid_lines is not None else []
    num_updates, _ = _run_import(lines, form, item_sync, row_sync, sink)
    return num_updates


def import_csv(
    lines: Iterable[str],
    form: Form,
    item_sync: ItemSync,
    row_sync: StudentRowSync,
) -> ImportResult:
    """
    Import a grades CSV file and report the outcome.

    Same protocol as parse_csv(), packaged as an ImportResult.

    Example:
        >>> with open("grades.csv", newline="") as f:
        ...     result = import_csv(f, store.form, store.item_sync, store.row_sync)
        >>> result.update_count
        3
    """
    invalid_lines: List[str] = []
    num_updates, num_lines_read = _run_import(lines, form, item_sync, row_sync, invalid_lines)
    return ImportResult(
        update_count=num_updates,
        invalid_lines=tuple(invalid_lines),
        lines_read=num_lines_read,
    )


def _run_import(
    lines: Iterable[str],
    form: Form,
    item_sync: ItemSync,
    row_sync: StudentRowSync,
    invalid_lines: List[str],
) -> Tuple[int, int]:
    num_updates = 0
    num_lines_read = 0
    stream = iter(lines)

    logger.info(f"Importing grades CSV into form {form.identifier!r}")

    # Parse the item names
    names = _read_header_line(stream, invalid_lines)
    if names is not None:
        num_lines_read += 1
    else:
        names = []

    # Parse the item totals
    totals = _read_header_line(stream, invalid_lines)
    if totals is not None:
        num_lines_read += 1
    else:
        totals = []

    # Create/update the items
    result = _sync_items(item_sync, names, totals, form)
    if result.ok:
        num_updates += 1
    else:
        logger.warning(f"Rejected item header: {result.error}")
        invalid_lines.append(",".join(names))
        invalid_lines.append(f"{','.join(totals)}: {result.error}")

    # Parse the grades
    record_lines: List[str] = []
    reader = csv.reader(_tracked(stream, record_lines))
    while True:
        record_lines.clear()
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            text = "".join(record_lines).rstrip("\r\n")
            logger.warning(f"Unreadable CSV record near line {reader.line_num + 2}: {e}")
            invalid_lines.append(f"{text}: {e}")
            continue

        if _is_blank(row):
            continue
        if num_lines_read > 1:
            result = _sync_row(row_sync, row, form)
            if not result.ok:
                logger.warning(f"Rejected grade row {row[0]!r}: {result.error}")
                invalid_lines.append(f"{','.join(row)}: {result.error}")
                continue
            num_updates += 1
        num_lines_read += 1

    logger.info(
        f"Imported {num_updates} updates into form {form.identifier!r}, "
        f"{len(invalid_lines)} invalid lines"
    )
    return num_updates, num_lines_read


def _tracked(stream: Iterator[str], record_lines: List[str]) -> Iterator[str]:
    """Yield lines from stream, keeping the ones of the current record."""
    for line in stream:
        record_lines.append(line)
        yield line


def _read_header_line(stream: Iterator[str], invalid_lines: List[str]) -> Optional[List[str]]:
    """
    Read exactly one physical line as a header row.

    Returns:
        The parsed fields, or None when the line is blank, missing or
        unparseable
    """
    line = next(stream, "")
    try:
        rows = list(csv.reader([line]))
    except csv.Error as e:
        logger.warning(f"Unreadable header line {line.rstrip()!r}: {e}")
        invalid_lines.append(f"{line.rstrip()}: {e}")
        return None

    header = None
    for row in rows:
        if not _is_blank(row):
            header = row
    return header


def _is_blank(row: Sequence[str]) -> bool:
    """True when the row serializes to nothing but whitespace."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(row)
    return not buffer.getvalue().strip()


def _sync_items(item_sync: ItemSync, names: List[str], totals: List[str], form: Form) -> RowResult:
    try:
        item_sync.create_or_update(names, totals, form)
    except ItemSyncError as e:
        return RowResult.failure(str(e))
    return RowResult.success()


def _sync_row(row_sync: StudentRowSync, row: List[str], form: Form) -> RowResult:
    try:
        row_sync.create_or_update(row, form)
    except RowSyncError as e:
        return RowResult.failure(str(e))
    return RowResult.success()
