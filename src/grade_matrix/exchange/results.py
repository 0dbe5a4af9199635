"""
Module: exchange.results

Purpose:
    Result values for CSV import. Collaborator failures are turned into
    RowResult values at the call site, so the import driver accumulates
    diagnostics instead of letting exceptions cross into the caller.

Key Classes:
    - RowResult: Outcome of applying one header pair or grade row
    - ImportResult: Outcome of a whole import
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RowResult:
    """
    Outcome of one collaborator call.

    Attributes:
        error: Failure message, None on success
    """
    error: Optional[str] = None

    @classmethod
    def success(cls) -> RowResult:
        return cls()

    @classmethod
    def failure(cls, message: str) -> RowResult:
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ImportResult:
    """
    Outcome of a CSV import (immutable).

    Attributes:
        update_count: Successful updates (the item header counts as one)
        invalid_lines: Rejected lines, each followed by ": <reason>"
        lines_read: Header lines read plus grade rows that were not rejected

    Example:
        >>> result = import_csv(lines, store.form, store.item_sync, store.row_sync)
        >>> if not result.ok:
        ...     print("\\n".join(result.invalid_lines))
    """
    update_count: int
    invalid_lines: Tuple[str, ...] = ()
    lines_read: int = 0

    @property
    def ok(self) -> bool:
        """True when no line was rejected."""
        return not self.invalid_lines
