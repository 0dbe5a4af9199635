"""
Module: marks

Purpose:
    Provides the blank-vs-zero sum type used for every grade value.
    A grade is either ``Present(value)`` or ``Absent()``; the two never
    compare equal, so a recorded 0 can never be confused with "no grade".

Key Functions:
    - Present(value): A recorded numeric grade
    - BLANK_MARK: The canonical Absent instance
    - total_of(marks): Sum present marks, staying blank if none are present
    - format_number(value): Literal text form used in CSV output

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - core.models.form.StudentRow
    - aggregation.engine
    - exchange.csv_export
    - store.memory
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Union


def format_number(value: float) -> str:
    """
    Render a number the way it is written in CSV files.

    Integral values drop the trailing ``.0`` so that a grade entered as
    ``5`` is exported as ``5`` rather than ``5.0``.

    Example:
        >>> format_number(5.0)
        '5'
        >>> format_number(7.5)
        '7.5'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class Present:
    """
    A recorded grade.

    Attributes:
        value: Numeric grade value (may legitimately be 0)

    Invariants:
        - value is a finite number

    Example:
        >>> Present(0) == BLANK_MARK
        False
        >>> str(Present(7.5))
        '7.5'
    """

    value: float

    def __post_init__(self) -> None:
        """Validate the value on construction."""
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"Grade value must be a number: {self.value!r}")
        if not math.isfinite(self.value):
            raise ValueError(f"Grade value must be finite: {self.value}")

    @property
    def is_blank(self) -> bool:
        return False

    def __str__(self) -> str:
        return format_number(self.value)

    def __repr__(self) -> str:
        return f"Present({self.value!r})"


@dataclass(frozen=True, slots=True)
class Absent:
    """
    No grade recorded.

    All instances compare equal; use ``BLANK_MARK`` rather than
    constructing new ones. The text form is the empty string.
    """

    @property
    def is_blank(self) -> bool:
        return True

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "BLANK_MARK"


BLANK_MARK = Absent()

Mark = Union[Present, Absent]


def total_of(marks: Iterable[Mark]) -> Mark:
    """
    Sum a sequence of marks.

    Absent marks contribute nothing. If no mark is present the result
    is ``BLANK_MARK``, never ``Present(0)``.

    Args:
        marks: Marks to add up

    Returns:
        Present(sum of present values) or BLANK_MARK

    Example:
        >>> total_of([Present(5), BLANK_MARK])
        Present(5)
        >>> total_of([BLANK_MARK, BLANK_MARK])
        BLANK_MARK
    """
    total = 0
    any_present = False
    for mark in marks:
        if isinstance(mark, Present):
            total += mark.value
            any_present = True
        elif not isinstance(mark, Absent):
            raise TypeError(f"Expected Present or Absent, got {mark!r}")
    if not any_present:
        return BLANK_MARK
    return Present(total)
