"""
Schema Validation Utilities

Validates gradebook JSON data before it is turned into models.

- `validate_gradebook()` runs fast structural checks and, in strict mode,
  full JSON Schema validation against `gradebook.schema.json`.
- Fail fast: the first problem raises ValidationError with the JSON path
  of the offending value.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from grade_matrix.errors import GradeMatrixError


GRADEBOOK_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(GradeMatrixError):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_gradebook(data: Any, *, strict: bool = False) -> None:
    """
    Validate gradebook data.

    Args:
        data: Decoded gradebook JSON
        strict: If True, also validate against the JSON Schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Gradebook must be a JSON object")

    required = ["schema_version", "form", "students"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    version = data.get("schema_version")
    if version != GRADEBOOK_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported gradebook schema version: {version} (expected {GRADEBOOK_SCHEMA_VERSION})",
            path="schema_version"
        )

    _validate_form(data["form"], "form")

    students = data["students"]
    if not isinstance(students, list):
        raise ValidationError("students must be a list", path="students")
    seen = set()
    for i, student in enumerate(students):
        path = f"students[{i}]"
        if not isinstance(student, dict) or not student.get("user_name"):
            raise ValidationError("Student must have a user_name", path=path)
        if student["user_name"] in seen:
            raise ValidationError(
                f"Duplicate student user_name: {student['user_name']!r}",
                path=f"{path}.user_name"
            )
        seen.add(student["user_name"])

    if strict:
        schema = _load_schema("gradebook")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e


def _validate_form(data: Any, path: str) -> None:
    """Validate the form object."""
    if not isinstance(data, dict):
        raise ValidationError("form must be an object", path=path)

    missing = [f for f in ("identifier", "items", "rows") if f not in data]
    if missing:
        raise ValidationError(
            f"Form missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )

    for key in ("items", "rows"):
        if not isinstance(data[key], list):
            raise ValidationError(f"{key} must be a list", path=f"{path}.{key}")

    names = set()
    for i, item in enumerate(data["items"]):
        item_path = f"{path}.items[{i}]"
        name = item.get("name") if isinstance(item, dict) else None
        if not name:
            raise ValidationError("Item must have a name", path=item_path)
        if name in names:
            raise ValidationError(f"Duplicate item name: {name!r}", path=f"{item_path}.name")
        names.add(name)

        out_of = item.get("out_of")
        if isinstance(out_of, bool) or not isinstance(out_of, (int, float)) or out_of < 0:
            raise ValidationError(
                f"Invalid out_of: {out_of} (must be a non-negative number)",
                path=f"{item_path}.out_of"
            )

    for i, row in enumerate(data["rows"]):
        row_path = f"{path}.rows[{i}]"
        if not isinstance(row, dict) or not row.get("student_id"):
            raise ValidationError("Row must have a student_id", path=row_path)
        cells = row.get("cells", {})
        if not isinstance(cells, dict):
            raise ValidationError("cells must be an object", path=f"{row_path}.cells")
        for item_name, value in cells.items():
            if item_name not in names:
                raise ValidationError(
                    f"Cell for unknown item: {item_name!r}",
                    path=f"{row_path}.cells.{item_name}"
                )
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(
                    f"Invalid grade: {value!r} (must be a number or null)",
                    path=f"{row_path}.cells.{item_name}"
                )
