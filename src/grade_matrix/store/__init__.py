"""
Module: store

Purpose:
    Collaborator interfaces for reading and writing the grading matrix,
    an in-memory reference implementation, and the locked JSON gradebook
    file used by the command line.
"""

from .interfaces import ItemSync, StudentDirectory, StudentRowSync
from .memory import (
    GradeMatrixStore,
    InMemoryItemSync,
    InMemoryStudentDirectory,
    InMemoryStudentRowSync,
    parse_number,
)
from .gradebook_file import load_gradebook, save_gradebook, update_gradebook

__all__ = [
    "ItemSync",
    "StudentDirectory",
    "StudentRowSync",
    "GradeMatrixStore",
    "InMemoryItemSync",
    "InMemoryStudentDirectory",
    "InMemoryStudentRowSync",
    "parse_number",
    "load_gradebook",
    "save_gradebook",
    "update_gradebook",
]
