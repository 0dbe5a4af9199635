"""
Module: form

Purpose:
    Data model of a grade entry form: the ordered graded items (columns),
    one StudentRow per student (rows), and the cells in between.

Key Classes:
    - Item: A graded column with its maximum mark
    - StudentRow: One student's cells plus the released flag
    - Form: Items and rows of one grading matrix
    - Student: Directory entry used for export and pagination

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - .marks: Present / Absent sum type

Used By:
    - aggregation.engine
    - exchange.csv_export / exchange.csv_import
    - store.memory
    - core.utils.serialization

Note:
    Item and Student are frozen; a changed item is replaced, not mutated.
    Form and StudentRow are containers updated in place by the store
    collaborators, which own persistence and concurrency.
"""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .marks import BLANK_MARK, Absent, Mark, Present


@dataclass(frozen=True, slots=True)
class Item:
    """
    A graded column (e.g. a question).

    Attributes:
        name: Column heading
        out_of: Maximum possible mark, non-negative
        position: 1-based column position within the form

    Example:
        >>> Item("Q1", 10, position=1)
        Item(name='Q1', out_of=10, position=1)
    """

    name: str
    out_of: float
    position: int = 0

    def __post_init__(self) -> None:
        """Validate item on construction."""
        if isinstance(self.out_of, bool) or not isinstance(self.out_of, (int, float)):
            raise TypeError(f"out_of must be a number: {self.out_of!r}")
        if not math.isfinite(self.out_of) or self.out_of < 0:
            raise ValueError(f"out_of must be a non-negative number: {self.out_of}")


@dataclass(frozen=True, slots=True)
class Student:
    """
    Student directory entry.

    Attributes:
        user_name: Identifier written to and read from CSV files
        last_name: Sort key for alphabetical pagination
        first_name: Given name, informational
        hidden: Hidden students are left out of exports
    """

    user_name: str
    last_name: str = ""
    first_name: str = ""
    hidden: bool = False


@dataclass
class StudentRow:
    """
    One student's grades on a form.

    Cells are keyed by item name, which keeps at most one cell per item.
    A missing key and an ``Absent`` value both mean "no grade".

    Attributes:
        student_id: The student's user name
        released: Whether the student may see totals
        cells: Item name -> Mark
    """

    student_id: str
    released: bool = False
    cells: Dict[str, Mark] = field(default_factory=dict)

    def grade_for(self, item: Item) -> Mark:
        """Return the cell for ``item``, BLANK_MARK when none is recorded."""
        return self.cells.get(item.name, BLANK_MARK)

    def set_grade(self, item: Item, mark: Mark) -> None:
        if not isinstance(mark, (Present, Absent)):
            raise TypeError(f"Expected Present or Absent, got {mark!r}")
        self.cells[item.name] = mark

    def iter_marks(self) -> Iterator[Mark]:
        return iter(self.cells.values())


@dataclass
class Form:
    """
    A grading matrix: ordered items and per-student rows.

    Attributes:
        identifier: Short identifier of the form (e.g. "Midterm")
        date: Date the form applies to, if known
        items: Graded columns; kept ordered by position
        rows: Student id -> StudentRow

    Example:
        >>> form = Form("Quiz 1", items=[Item("Q1", 10, 1), Item("Q2", 10, 2)])
        >>> [item.name for item in form.items]
        ['Q1', 'Q2']
    """

    identifier: str
    date: Optional[datetime.date] = None
    items: List[Item] = field(default_factory=list)
    rows: Dict[str, StudentRow] = field(default_factory=dict)

    def __post_init__(self) -> None:
        names = [item.name for item in self.items]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate item names in form {self.identifier!r}: {names}")
        self.items = sorted(self.items, key=lambda item: item.position)

    def item_named(self, name: str) -> Optional[Item]:
        for item in self.items:
            if item.name == name:
                return item
        return None

    def row_for(self, student_id: str) -> Optional[StudentRow]:
        """Return the student's row, or None when no grades were ever entered."""
        return self.rows.get(student_id)

    def ensure_row(self, student_id: str) -> StudentRow:
        """Return the student's row, creating an empty one if needed."""
        row = self.rows.get(student_id)
        if row is None:
            row = StudentRow(student_id)
            self.rows[student_id] = row
        return row

    def released_rows(self) -> List[StudentRow]:
        return [row for row in self.rows.values() if row.released]
