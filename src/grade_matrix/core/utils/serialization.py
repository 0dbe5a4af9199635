"""
Serialization Utilities

Provides to/from JSON utilities for the gradebook models.

- `serialize_*` / `deserialize_*` pairs for forms and students
- Absent cells are written as JSON null, never as 0
- Validation via `validate_gradebook()` before deserialization
- Totals and percentages are never stored; they are always recalculated
"""

from __future__ import annotations

import datetime
from typing import Any, Iterable, List, Tuple

from ..models.form import Form, Item, Student, StudentRow
from ..models.marks import BLANK_MARK, Mark, Present
from ..schemas.validator import GRADEBOOK_SCHEMA_VERSION, validate_gradebook


# ─────────────────────────────────────────────────────────────────────────────
# Form Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_form(form: Form) -> dict[str, Any]:
    """
    Serialize a Form to a dictionary.

    Args:
        form: Form instance to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "identifier": form.identifier,
        "date": form.date.isoformat() if form.date else None,
        "items": [
            {"name": item.name, "out_of": item.out_of, "position": item.position}
            for item in form.items
        ],
        "rows": [
            {
                "student_id": row.student_id,
                "released": row.released,
                "cells": {name: _serialize_mark(mark) for name, mark in row.cells.items()},
            }
            for row in form.rows.values()
        ],
    }


def deserialize_form(data: dict[str, Any]) -> Form:
    """
    Deserialize a Form from a dictionary.

    Args:
        data: Dictionary from JSON (already validated)

    Returns:
        Form instance

    Raises:
        ValueError: If data cannot be parsed
    """
    items = [
        Item(entry["name"], entry["out_of"], entry.get("position", index))
        for index, entry in enumerate(data["items"], start=1)
    ]
    rows = {}
    for entry in data["rows"]:
        row = StudentRow(
            student_id=entry["student_id"],
            released=entry.get("released", False),
            cells={name: _deserialize_mark(value) for name, value in entry["cells"].items()},
        )
        rows[row.student_id] = row

    raw_date = data.get("date")
    return Form(
        identifier=data["identifier"],
        date=datetime.date.fromisoformat(raw_date) if raw_date else None,
        items=items,
        rows=rows,
    )


def _serialize_mark(mark: Mark) -> float | None:
    if isinstance(mark, Present):
        return mark.value
    return None


def _deserialize_mark(value: float | None) -> Mark:
    if value is None:
        return BLANK_MARK
    return Present(value)


# ─────────────────────────────────────────────────────────────────────────────
# Student Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_student(student: Student) -> dict[str, Any]:
    return {
        "user_name": student.user_name,
        "last_name": student.last_name,
        "first_name": student.first_name,
        "hidden": student.hidden,
    }


def deserialize_student(data: dict[str, Any]) -> Student:
    return Student(
        user_name=data["user_name"],
        last_name=data.get("last_name", ""),
        first_name=data.get("first_name", ""),
        hidden=data.get("hidden", False),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Gradebook Documents
# ─────────────────────────────────────────────────────────────────────────────

def serialize_gradebook(form: Form, students: Iterable[Student]) -> dict[str, Any]:
    """
    Serialize a form and its student directory into one document.

    Returns:
        {"schema_version": 1, "form": {...}, "students": [...]}
    """
    return {
        "schema_version": GRADEBOOK_SCHEMA_VERSION,
        "form": serialize_form(form),
        "students": [serialize_student(s) for s in students],
    }


def deserialize_gradebook(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Tuple[Form, List[Student]]:
    """
    Deserialize a gradebook document.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before deserializing
        strict: Use full JSON Schema validation

    Returns:
        Tuple of (form, students)

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_gradebook(data, strict=strict)

    form = deserialize_form(data["form"])
    students = [deserialize_student(entry) for entry in data["students"]]
    return form, students
