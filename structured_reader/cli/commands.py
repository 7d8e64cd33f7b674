"""
CLI command implementations.

This module contains the business logic for each CLI command:
- validate: Report every error of a document
- read: Print the typed result of a document
- select: Print the value at a glob path
"""

import json
from pathlib import Path
from typing import Any, Optional

from structured_reader.exceptions import DeclarationError, WrongTypeError
from structured_reader.reader import JSONReader
from structured_reader.schema.parser import load_schema_file

from .display import (
    console,
    print_error,
    print_header,
    print_info,
    print_json,
    print_separator,
    print_success,
    print_validation_errors,
    to_json,
)


def load_reader(schema_path: Path, show_schema: bool = False) -> JSONReader:
    """
    Load a declaration file and wrap its reader tree.

    Exits with code 1 if the file can't be read or the declaration is malformed.
    """
    try:
        reader = JSONReader(load_schema_file(schema_path))
        print_success(f"Loaded schema from: {schema_path}")
    except (ValueError, DeclarationError) as e:
        print_error(f"Failed to load schema: {e}")
        raise SystemExit(1)

    if show_schema:
        with open(schema_path) as f:
            print_json(f.read(), title="Schema")

    return reader


def load_document(json_path: Path) -> Any:
    """Load a JSON document, exiting with code 1 if it is missing or invalid."""
    if not json_path.exists():
        print_error(f"JSON file not found: {json_path}")
        raise SystemExit(1)

    try:
        with open(json_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print_error(f"Invalid JSON: {e}")
        raise SystemExit(1)

    print_success(f"Loaded JSON from: {json_path}")
    return data


def validate_command(json_path: Path, schema_path: Path, show_schema: bool) -> None:
    """
    Execute the validate command.

    Args:
        json_path: Path to JSON file to validate
        schema_path: Path to declaration file
        show_schema: Whether to display the declaration
    """
    print_header("structured-reader - Validate JSON")

    reader = load_reader(schema_path, show_schema)
    data = load_document(json_path)

    print_json(data, title="Input JSON")
    print_separator()
    print_info("Validating...")

    result = reader.validate(data)

    console.print()
    if result.is_valid:
        print_success("Validation passed!")
    else:
        print_error(f"Validation failed with {len(result.errors)} error(s)")
        print_validation_errors(result.errors)
        raise SystemExit(1)


def read_command(json_path: Path, schema_path: Path, output_path: Optional[Path]) -> None:
    """
    Execute the read command.

    Args:
        json_path: Path to JSON file to read
        schema_path: Path to declaration file
        output_path: Optional path to save the typed result as JSON
    """
    print_header("structured-reader - Read JSON")

    reader = load_reader(schema_path)
    data = load_document(json_path)

    try:
        result = reader.read(data)
    except WrongTypeError as e:
        print_error(str(e))
        raise SystemExit(1)

    print_json(result, title="Result")

    if output_path:
        output_path.write_text(to_json(result))
        print_success(f"Saved result to: {output_path}")


def select_command(json_path: Path, schema_path: Path, pattern: str) -> None:
    """
    Execute the select command.

    Args:
        json_path: Path to JSON file to search
        schema_path: Path to declaration file
        pattern: Glob over rendered paths, e.g. ".widgets[*].price"
    """
    print_header("structured-reader - Select")

    reader = load_reader(schema_path)
    data = load_document(json_path)

    missing = object()
    selected = reader.select(data, pattern, default=missing)

    if selected is missing:
        print_error(f"Nothing matched {pattern}")
        raise SystemExit(1)

    print_json(to_json(selected), title=pattern)
