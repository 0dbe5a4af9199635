"""
Module: aggregation.engine

Purpose:
    Per-student totals, percentages and the cohort average of a form.
    A student with no recorded grade is blank, never a zero: blank totals
    propagate to blank percentages and are left out of averages.

Key Functions:
    - out_of_total(): Sum of the items' maximum marks
    - all_blank_grades(): True when a row holds no recorded grade
    - total_mark(): A student's total (Present or BLANK_MARK)
    - total_percent(): A student's total as a percentage
    - released_average(): Average percentage over released students

Dependencies:
    - core.models: Form, StudentRow, Present/Absent

Used By:
    - exchange.csv_export: Total percent column
    - cli: summary command
"""

from __future__ import annotations

import logging
from typing import Optional

from grade_matrix.core.models import BLANK_MARK, Absent, Form, Mark, Present, StudentRow, total_of
from grade_matrix.errors import DegenerateFormError

logger = logging.getLogger(__name__)


def out_of_total(form: Form) -> float:
    """
    Total number of marks available on the form.

    Args:
        form: Form to inspect

    Returns:
        Sum of every item's ``out_of``; 0 for a form without items
    """
    return sum(item.out_of for item in form.items)


def all_blank_grades(row: Optional[StudentRow]) -> bool:
    """Return True when the row is missing or has no Present cell."""
    if row is None:
        return True
    return not any(isinstance(mark, Present) for mark in row.iter_marks())


def total_mark(form: Form, student_id: str) -> Mark:
    """
    Total mark for a student.

    Args:
        form: Form holding the student's row
        student_id: Student identifier (user name)

    Returns:
        BLANK_MARK when the student has no row or every cell is absent,
        otherwise Present(sum of the recorded grades). A student whose
        recorded grades add up to 0 gets Present(0).

    Example:
        >>> total_mark(form, "alice")
        Present(5)
    """
    row = form.row_for(student_id)
    if row is None:
        return BLANK_MARK
    # Cells for items no longer on the form do not count
    return total_of(row.grade_for(item) for item in form.items)


def total_percent(form: Form, student_id: str) -> Mark:
    """
    Total mark for a student as a percentage of ``out_of_total``.

    Args:
        form: Form holding the student's row
        student_id: Student identifier (user name)

    Returns:
        BLANK_MARK when the total is blank, otherwise
        Present(total / out_of_total * 100)

    Raises:
        DegenerateFormError: If the total is not blank and the form is
            worth 0 marks
    """
    total = total_mark(form, student_id)
    if isinstance(total, Absent):
        return BLANK_MARK
    return Present(_as_percent(form, total.value))


def released_average(form: Form) -> float:
    """
    Average mark of the released students, as a percentage.

    Students whose total is blank are skipped entirely (they count in
    neither the sum nor the number of students). When no released
    student has a grade the result is 0, not BLANK_MARK.

    Args:
        form: Form to average

    Returns:
        Average percentage, or 0 when nobody contributes

    Raises:
        DegenerateFormError: If students contribute and the form is
            worth 0 marks
    """
    total_marks = 0.0
    num_released = 0

    for row in form.released_rows():
        total = total_mark(form, row.student_id)
        if isinstance(total, Present):
            total_marks += total.value
            num_released += 1

    if num_released == 0:
        logger.debug(f"No released grades on form {form.identifier!r}; average is 0")
        return 0

    return _as_percent(form, total_marks / num_released)


def _as_percent(form: Form, value: float) -> float:
    out_of = out_of_total(form)
    if out_of == 0:
        raise DegenerateFormError(form.identifier)
    return value / out_of * 100
