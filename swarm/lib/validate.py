"""
Schema validation for SWARM record headers.

Each record kind (story, knowledge, retro, config) has a JSON Schema in
swarm/schemas/. Validation never raises on bad data: every violation is
collected in one pass and returned in a ValidationResult, so a caller
sees all problems at once.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)


class SchemaError(Exception):
    """Schema file missing or unreadable (a packaging problem, not bad data)."""

    def __init__(self, schema_name: str, message: str):
        self.schema_name = schema_name
        super().__init__(f"[{schema_name}] {message}")


@dataclass
class FieldError:
    field: str       # Dotted/bracketed path, e.g. tasks[2].status
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass
class ValidationResult:
    valid: bool
    errors: list[FieldError] = field(default_factory=list)

    def details(self) -> list[str]:
        return [str(e) for e in self.errors]


# Cache loaded schemas
_schema_cache: dict[str, dict] = {}

_TYPE_NAMES = {
    "string": "a string",
    "array": "an array",
    "object": "an object",
    "boolean": "a boolean",
    "integer": "an integer",
    "number": "a number",
    "null": "null",
}


def _get_schemas_dir() -> Path:
    """Get path to schemas directory."""
    return Path(__file__).parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise SchemaError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text())
    return _schema_cache[schema_name]


def _format_path(parts) -> str:
    """['tasks', 2, 'status'] -> 'tasks[2].status'."""
    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "(root)"


def _describe(schema: dict) -> str:
    """Expectation message for a field schema."""
    if "enum" in schema:
        return f"must be one of: {', '.join(schema['enum'])}"
    expected = schema.get("type")
    if isinstance(expected, list):
        return "must be " + " or ".join(_TYPE_NAMES.get(t, t) for t in expected)
    if expected:
        return f"must be {_TYPE_NAMES.get(expected, expected)}"
    return "is required"


def _field_errors(error: jsonschema.ValidationError) -> list[FieldError]:
    """Convert one jsonschema error into field errors.

    A missing required property gets the same message as a mistyped one.
    """
    parent = list(error.absolute_path)
    if error.validator == "required":
        properties = error.schema.get("properties", {})
        return [
            FieldError(_format_path(parent + [name]), _describe(properties.get(name, {})))
            for name in error.validator_value
            if isinstance(error.instance, dict) and name not in error.instance
        ]
    if error.validator in ("type", "enum"):
        return [FieldError(_format_path(parent), _describe(error.schema))]
    return [FieldError(_format_path(parent), error.message)]


def validate(data: Any, schema_name: str) -> ValidationResult:
    """
    Validate data against named schema.

    Args:
        data: Decoded header (any type; non-mappings are reported, not raised)
        schema_name: Schema name (e.g., "story", "knowledge", "retro", "config")

    Returns:
        ValidationResult listing every violation

    Raises:
        SchemaError: If the schema file itself is missing
    """
    schema = _load_schema(schema_name)
    validator = jsonschema.Draft7Validator(schema)

    errors: list[FieldError] = []
    seen: set[tuple[str, str]] = set()
    for error in validator.iter_errors(data):
        for field_error in _field_errors(error):
            key = (field_error.field, field_error.message)
            if key not in seen:
                seen.add(key)
                errors.append(field_error)

    if errors:
        logger.debug(f"[VALIDATE] {schema_name}: {len(errors)} error(s)")
    return ValidationResult(valid=not errors, errors=errors)


def validate_story(header: Any) -> ValidationResult:
    """Validate a story header."""
    return validate(header, "story")


def validate_knowledge(header: Any) -> ValidationResult:
    """Validate a knowledge item header."""
    return validate(header, "knowledge")


def validate_retro(header: Any) -> ValidationResult:
    """Validate a retrospective header."""
    return validate(header, "retro")


def validate_config(header: Any) -> ValidationResult:
    """Validate a project configuration header."""
    return validate(header, "config")
