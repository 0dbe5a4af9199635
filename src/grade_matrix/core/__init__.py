"""
Grade Matrix Core Package

Shared data models, schema validation and serialization for the
aggregation, exchange and pagination packages.
"""

from .models import (
    BLANK_MARK,
    Absent,
    Form,
    Item,
    Mark,
    Present,
    Student,
    StudentRow,
)

__all__ = [
    "BLANK_MARK",
    "Absent",
    "Form",
    "Item",
    "Mark",
    "Present",
    "Student",
    "StudentRow",
]
