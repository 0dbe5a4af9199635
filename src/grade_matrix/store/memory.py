"""
Module: store.memory

Purpose:
    In-memory reference implementation of the store interfaces. Used by
    the command line (on top of the gradebook JSON file) and by tests.

Key Classes:
    - InMemoryStudentDirectory: Students keyed by user name
    - InMemoryItemSync: Applies the CSV header rows to a form's items
    - InMemoryStudentRowSync: Applies one CSV grade row to a form
    - GradeMatrixStore: One form plus its collaborators

Row Layout:
    Header rows:  ["", name_1, ..., name_n] / ["", out_of_1, ..., out_of_n]
    Grade rows:   [user_name, grade_1, ..., grade_n, total_percent]
    The leading header cell and the trailing total column are ignored.

Dependencies:
    - core.models
    - errors: ItemSyncError, RowSyncError

Used By:
    - store.gradebook_file
    - cli
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from grade_matrix.core.models import BLANK_MARK, Form, Item, Mark, Present, Student
from grade_matrix.errors import ItemSyncError, RowSyncError

logger = logging.getLogger(__name__)


def parse_number(text: str) -> Optional[float]:
    """
    Parse a CSV field as a number.

    Returns:
        The value, or None when the field is not a finite number
    """
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Student Directory
# ─────────────────────────────────────────────────────────────────────────────

class InMemoryStudentDirectory:
    """Students keyed by user name."""

    def __init__(self, students: Iterable[Student] = ()):
        self._students: Dict[str, Student] = {}
        for student in students:
            self.add(student)

    def add(self, student: Student) -> None:
        if student.user_name in self._students:
            raise ValueError(f"Duplicate student user name: {student.user_name!r}")
        self._students[student.user_name] = student

    def find(self, user_name: str) -> Optional[Student]:
        return self._students.get(user_name)

    def all(self) -> List[Student]:
        """Every student, hidden ones included, ordered by user name."""
        return sorted(self._students.values(), key=lambda s: s.user_name)

    def list_visible(self) -> List[Student]:
        """Students that are not hidden, ordered by user name."""
        return [s for s in self.all() if not s.hidden]

    def __len__(self) -> int:
        return len(self._students)


# ─────────────────────────────────────────────────────────────────────────────
# Item Sync
# ─────────────────────────────────────────────────────────────────────────────

class InMemoryItemSync:
    """
    Create or update a form's items from the CSV header rows.

    Items named in the header take the header's column order and totals.
    Items the header does not mention are kept, after the named ones.
    """

    def create_or_update(self, names: Sequence[str], totals: Sequence[str], form: Form) -> None:
        if len(names) != len(totals):
            raise ItemSyncError(
                f"Item names and totals differ in length ({len(names)} names, {len(totals)} totals)"
            )

        parsed: List[Item] = []
        seen = set()
        for position, (raw_name, raw_total) in enumerate(zip(names[1:], totals[1:]), start=1):
            name = raw_name.strip()
            if not name:
                raise ItemSyncError(f"Item name in column {position + 1} is blank")
            if name in seen:
                raise ItemSyncError(f"Duplicate item name: {name!r}")
            seen.add(name)

            out_of = parse_number(raw_total)
            if out_of is None or out_of < 0:
                raise ItemSyncError(
                    f"Invalid total {raw_total!r} for item {name!r} (must be a non-negative number)"
                )
            parsed.append(Item(name, out_of, position))

        unlisted = [item for item in form.items if item.name not in seen]
        for offset, item in enumerate(unlisted, start=len(parsed) + 1):
            parsed.append(Item(item.name, item.out_of, offset))

        created = sum(1 for item in parsed if form.item_named(item.name) is None)
        form.items[:] = parsed
        logger.debug(
            f"Synced {len(seen)} items on form {form.identifier!r} ({created} created)"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Student Row Sync
# ─────────────────────────────────────────────────────────────────────────────

class InMemoryStudentRowSync:
    """
    Create or update one student's cells from a CSV grade row.

    The whole row is validated before the form is touched, so a rejected
    row leaves no partial update behind.
    """

    def __init__(self, directory: InMemoryStudentDirectory):
        self.directory = directory

    def create_or_update(self, row: Sequence[str], form: Form) -> None:
        expected = len(form.items) + 2
        if len(row) != expected:
            raise RowSyncError(
                f"Expected {expected} fields (user name, {len(form.items)} grades, total), "
                f"got {len(row)}"
            )

        user_name = row[0].strip()
        if not user_name:
            raise RowSyncError("Missing user name")
        if self.directory.find(user_name) is None:
            raise RowSyncError(f"Unknown student: {user_name!r}")

        marks: List[Mark] = []
        for item, raw_grade in zip(form.items, row[1:]):
            if not raw_grade.strip():
                marks.append(BLANK_MARK)
                continue
            value = parse_number(raw_grade)
            if value is None:
                raise RowSyncError(f"Invalid grade {raw_grade!r} for item {item.name!r}")
            marks.append(Present(value))

        student_row = form.ensure_row(user_name)
        for item, mark in zip(form.items, marks):
            student_row.set_grade(item, mark)
        logger.debug(f"Updated grades for {user_name!r} on form {form.identifier!r}")


# ─────────────────────────────────────────────────────────────────────────────
# Store
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class GradeMatrixStore:
    """
    One form together with the collaborators that read and write it.

    Attributes:
        form: The grading matrix
        directory: Students the form may hold rows for

    Example:
        >>> store = GradeMatrixStore(Form("Quiz"), InMemoryStudentDirectory([Student("alice")]))
        >>> parse_csv(lines, store.form, store.item_sync, store.row_sync)
    """

    form: Form
    directory: InMemoryStudentDirectory = field(default_factory=InMemoryStudentDirectory)

    def __post_init__(self) -> None:
        self.item_sync = InMemoryItemSync()
        self.row_sync = InMemoryStudentRowSync(self.directory)
