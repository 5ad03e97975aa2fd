"""JSON Schema validation wrapper."""

from __future__ import annotations

import re
from dataclasses import dataclass

from jsonschema import Draft202012Validator
from jsonschema import ValidationError as SchemaError

_QUOTED = re.compile(r"'([^']*)'")

_VALIDATOR_TYPES = {
    "required": "missing_required",
    "type": "invalid_type",
    "minLength": "min_length_violation",
    "maxLength": "max_length_violation",
    "pattern": "pattern_mismatch",
    "enum": "enum_violation",
    "additionalProperties": "additional_property",
}


@dataclass
class ValidationError:
    """Structured validation error for machine-readable error reporting.

    Attributes:
        type: Error category (missing_required, invalid_type, additional_property, ...).
        message: Human-readable error message.
        parameter: Top-level argument the error is about, when one can be named.
        hint: Actionable suggestion for fixing the error.
    """

    type: str
    message: str
    parameter: str | None = None
    hint: str | None = None


def validate_payload_structured(
    schema: dict[str, object],
    payload: dict[str, object],
) -> list[ValidationError]:
    """Validate payload and return structured errors, ordered by argument."""
    validator = Draft202012Validator(schema)
    raw = sorted(
        validator.iter_errors(payload),
        key=lambda e: ([str(p) for p in e.absolute_path], e.message),
    )
    return [_structure(error) for error in raw]


def _structure(error: SchemaError) -> ValidationError:
    parameter = _parameter_name(error)
    hint = None
    if error.validator == "required":
        hint = f"Add the required argument '{parameter}'."
    elif error.validator == "type":
        hint = f"Change the value to type '{error.validator_value}'."
    elif error.validator == "minLength":
        hint = f"Provide a value with at least {error.validator_value} character(s)."
    elif error.validator == "additionalProperties":
        hint = "Remove the unexpected argument or check for typos."

    return ValidationError(
        type=_VALIDATOR_TYPES.get(str(error.validator), "validation_error"),
        message=error.message,
        parameter=parameter,
        hint=hint,
    )


def _parameter_name(error: SchemaError) -> str | None:
    if error.absolute_path:
        return str(error.absolute_path[0])
    if error.validator in ("required", "additionalProperties"):
        names = _QUOTED.findall(error.message)
        if names:
            return names[0]
    return None
