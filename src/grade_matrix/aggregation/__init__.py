"""
Module: aggregation

Purpose:
    Totals, percentages and averages over a grading matrix.
"""

from .engine import (
    all_blank_grades,
    out_of_total,
    released_average,
    total_mark,
    total_percent,
)

__all__ = [
    "all_blank_grades",
    "out_of_total",
    "released_average",
    "total_mark",
    "total_percent",
]
