"""Serialization helpers for the core models."""

from .serialization import (
    deserialize_form,
    deserialize_gradebook,
    deserialize_student,
    serialize_form,
    serialize_gradebook,
    serialize_student,
)

__all__ = [
    "deserialize_form",
    "deserialize_gradebook",
    "deserialize_student",
    "serialize_form",
    "serialize_gradebook",
    "serialize_student",
]
