"""
Module: exchange

Purpose:
    CSV export and import of a grading matrix.

Key Functions:
    - to_csv(): Export a form with total percentages
    - parse_csv(): Import, returning the number of updates
    - import_csv(): Import, returning an ImportResult
"""

from .csv_export import iter_csv_rows, to_csv
from .csv_import import import_csv, parse_csv
from .results import ImportResult, RowResult

__all__ = [
    "iter_csv_rows",
    "to_csv",
    "import_csv",
    "parse_csv",
    "ImportResult",
    "RowResult",
]
