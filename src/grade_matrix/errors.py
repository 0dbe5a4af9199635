"""
Module: errors

Purpose:
    Exception hierarchy shared across the grade matrix packages.

Key Classes:
    - GradeMatrixError: Base class for every error raised by this package
    - DegenerateFormError: Percentage requested for a form worth 0 marks
    - ItemSyncError: Item header rows rejected by the item collaborator
    - RowSyncError: Grade row rejected by the student row collaborator
    - ConfigError: Invalid configuration file
    - GradebookFileError: Gradebook file missing or unreadable

Used By:
    - aggregation.engine
    - exchange.csv_import (catches ItemSyncError / RowSyncError)
    - store.memory (raises ItemSyncError / RowSyncError)
    - cli (reports GradeMatrixError subclasses)
"""


class GradeMatrixError(Exception):
    """Base error for the grade matrix toolkit."""
    pass


class DegenerateFormError(GradeMatrixError):
    """A percentage was requested for a form whose out-of total is 0."""

    def __init__(self, form_identifier: str):
        super().__init__(
            f"Form {form_identifier!r} has an out-of total of 0; "
            "percentages are undefined"
        )
        self.form_identifier = form_identifier


class ItemSyncError(GradeMatrixError):
    """Item names/totals could not be applied to a form."""
    pass


class RowSyncError(GradeMatrixError):
    """A student grade row could not be applied to a form."""
    pass


class ConfigError(GradeMatrixError):
    """Configuration file is missing or invalid."""
    pass


class GradebookFileError(GradeMatrixError):
    """Gradebook file is missing or cannot be decoded."""
    pass
