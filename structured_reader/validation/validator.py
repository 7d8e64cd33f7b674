"""
Validation results with path-annotated error reporting.

A collecting traversal records every failure instead of stopping at the first
one. This module holds the records it produces and helpers to present them.

Usage:
    ```python
    result = reader.validate('{"first_name": 1}')
    if not result.is_valid:
        print(format_validation_errors(result.errors))
        # Validation failed with 2 error(s):
        #   1. At .first_name: expected a String
        #   2. At .last_name: expected a String
    ```
"""

from dataclasses import dataclass, field
from typing import Any, List, NamedTuple


class ValidationError(NamedTuple):
    """
    A single validation error.

    Compares equal to a plain (path, reason) tuple.

    Attributes:
        path: Path to the error location (e.g. ".widgets[1].price"), "" at the root
        reason: Human-readable description of what was expected
    """

    path: str
    reason: str


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating a document against a reader.

    A valid document may legitimately read as None (e.g. a null reader), so
    check is_valid rather than testing object is None.

    Attributes:
        object: The produced value, or None when there are errors
        errors: Errors in traversal order (empty if valid)
    """

    object: Any = None
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def format_validation_errors(errors: List[ValidationError]) -> str:
    """
    Format validation errors as a human-readable string.

    Args:
        errors: List of validation errors

    Returns:
        str: Formatted error message
    """
    if not errors:
        return "No validation errors"

    lines = [f"Validation failed with {len(errors)} error(s):"]

    for i, error in enumerate(errors, 1):
        lines.append(f"  {i}. At {error.path or 'root'}: {error.reason}")

    return "\n".join(lines)
