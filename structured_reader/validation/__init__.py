"""
Validation results.

Components:
    - validator: ValidationResult, ValidationError and formatting helpers

A ValidationResult is what JSONReader.validate() returns: either the produced
object and no errors, or no object and every error found, in the order the
schema was traversed.

Example:
    ```python
    from structured_reader.validation import format_validation_errors

    result = reader.validate(document)
    if not result.is_valid:
        for error in result.errors:
            print(f"  - {error.path}: {error.reason}")
    ```
"""

from structured_reader.validation.validator import (
    ValidationError,
    ValidationResult,
    format_validation_errors,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "format_validation_errors",
]
