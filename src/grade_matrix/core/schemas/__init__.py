"""Gradebook JSON schema and validation."""

from .validator import GRADEBOOK_SCHEMA_VERSION, ValidationError, validate_gradebook

__all__ = ["GRADEBOOK_SCHEMA_VERSION", "ValidationError", "validate_gradebook"]
