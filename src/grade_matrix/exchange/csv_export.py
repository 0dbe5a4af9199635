"""
Module: exchange.csv_export

Purpose:
    Serialize a form's grading matrix, plus each student's total
    percentage, to CSV text.

Key Functions:
    - to_csv(): CSV report for a form
    - iter_csv_rows(): The same report as a sequence of field lists

Layout:
    Row 1:  "", item names in position order
    Row 2:  "", item out_of totals
    Row 3+: user name, one cell per item, total percent
    Blank cells and blank percentages are empty fields, never "0".

Dependencies:
    - csv (std)
    - aggregation.engine: total_percent

Used By:
    - cli: export command
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable, Iterator, List

from grade_matrix.aggregation.engine import total_percent
from grade_matrix.core.models import BLANK_MARK, Form, Student, format_number
from grade_matrix.errors import DegenerateFormError

logger = logging.getLogger(__name__)


def iter_csv_rows(form: Form, all_students: Iterable[Student]) -> Iterator[List[str]]:
    """
    Yield the CSV report row by row.

    A form worth 0 marks has no percentages; those cells are written
    blank and a warning is logged.

    Args:
        form: Form to export
        all_students: Students to write, already filtered and ordered by
            the caller (e.g. StudentDirectory.list_visible())

    Yields:
        Lists of field strings
    """
    # Item names, then item totals
    yield [""] + [item.name for item in form.items]
    yield [""] + [format_number(item.out_of) for item in form.items]

    for student in all_students:
        fields = [student.user_name]
        row = form.row_for(student.user_name)

        if row is None:
            # No grades recorded for this student
            fields.extend(str(BLANK_MARK) for _ in form.items)
            fields.append(str(BLANK_MARK))
        else:
            fields.extend(str(row.grade_for(item)) for item in form.items)
            fields.append(_percent_field(form, student.user_name))
        yield fields


def _percent_field(form: Form, student_id: str) -> str:
    try:
        return str(total_percent(form, student_id))
    except DegenerateFormError as e:
        logger.warning(f"No total percent for {student_id!r}: {e}")
        return str(BLANK_MARK)


def to_csv(form: Form, all_students: Iterable[Student]) -> str:
    """
    Get a CSV report of the grades for a form.

    Args:
        form: Form to export
        all_students: Students to write, in output order

    Returns:
        CSV text with "\\n" line endings

    Example:
        >>> print(to_csv(form, directory.list_visible()))
        ,Q1,Q2
        ,10,10
        alice,5,,25
        bob,,,
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    count = 0
    for fields in iter_csv_rows(form, all_students):
        writer.writerow(fields)
        count += 1

    logger.info(f"Exported form {form.identifier!r}: {len(form.items)} items, {count - 2} students")
    return buffer.getvalue()
