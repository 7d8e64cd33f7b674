"""
Command-line interface module.

This module provides a rich terminal interface for structured-reader using
Typer and Rich. Schemas are given as declaration files (see
structured_reader.schema.parser).

Commands:
    - validate: Report every error of a document, exit code 1 if any
    - read: Print the typed result of a document
    - select: Print the value at a glob path

Example Usage:
    ```bash
    structured-reader validate --schema widgets.schema.json --json widgets.json

    structured-reader read --schema widgets.schema.json --json widgets.json --output result.json

    structured-reader select --schema widgets.schema.json --json widgets.json \\
        --pattern '.widgets[*].price'
    ```
"""

from .main import app

__all__ = ["app"]
