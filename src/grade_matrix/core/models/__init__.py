"""
Core Models Package

Grade values and the grading matrix they live in.

| Type | Meaning |
|------|---------|
| `Present` / `Absent` | A recorded grade vs. no grade (never zero) |
| `Item` | A graded column with its `out_of` maximum |
| `StudentRow` | One student's cells and released flag |
| `Form` | Ordered items plus student rows |
| `Student` | Directory entry used by export and pagination |
"""

from .marks import BLANK_MARK, Absent, Mark, Present, format_number, total_of
from .form import Form, Item, Student, StudentRow

__all__ = [
    "BLANK_MARK",
    "Absent",
    "Mark",
    "Present",
    "format_number",
    "total_of",
    "Form",
    "Item",
    "Student",
    "StudentRow",
]
