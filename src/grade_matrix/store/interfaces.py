"""
Module: store.interfaces

Purpose:
    Narrow interfaces through which the CSV exchange reads and writes the
    grading matrix. Persistence, querying and per-row atomicity belong to
    the implementations.

Key Classes:
    - ItemSync: Create/update items from the two CSV header rows
    - StudentRowSync: Create/update one student's cells from a grade row
    - StudentDirectory: Visible students in a stable order

Used By:
    - exchange.csv_import
    - exchange.csv_export (via StudentDirectory, through callers)
    - store.memory: Reference implementation
"""

from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable

from grade_matrix.core.models import Form, Student


@runtime_checkable
class ItemSync(Protocol):
    def create_or_update(self, names: Sequence[str], totals: Sequence[str], form: Form) -> None:
        """
        Apply item names and totals to ``form``.

        Raises:
            ItemSyncError: If names and totals differ in length or a total
                is not a valid non-negative number
        """
        ...


@runtime_checkable
class StudentRowSync(Protocol):
    def create_or_update(self, row: Sequence[str], form: Form) -> None:
        """
        Apply one CSV grade row to ``form``.

        Raises:
            RowSyncError: If the field count does not match the form's
                items or a grade is neither numeric nor blank
        """
        ...


@runtime_checkable
class StudentDirectory(Protocol):
    def list_visible(self) -> List[Student]:
        """Visible students, ordered by user name."""
        ...
