"""
Main CLI entry point using Typer.

This module defines the command-line interface for structured-reader. It
provides three commands: validate, read, and select.
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from structured_reader.utils import setup_logging

from .commands import read_command, select_command, validate_command
from .display import print_error

app = typer.Typer(
    name="structured-reader",
    help="structured-reader - Typed reading and validation of JSON documents",
    add_completion=False,
    rich_markup_mode="rich"
)

SchemaOption = Annotated[
    Path,
    typer.Option("--schema", "-s", help="Path to declaration file", exists=True, file_okay=True, dir_okay=False)
]
JsonOption = Annotated[
    Path,
    typer.Option("--json", "-j", help="Path to JSON document", exists=True, file_okay=True, dir_okay=False)
]


@app.command("validate")
def validate(
    json_file: JsonOption,
    schema: SchemaOption,
    show_schema: Annotated[
        bool,
        typer.Option("--show-schema", help="Display the declaration")
    ] = False,
) -> None:
    """
    Validate a JSON document and report every error.

    Example:
        structured-reader validate \\
            --json widgets.json \\
            --schema widgets.schema.json
    """
    try:
        validate_command(json_path=json_file, schema_path=schema, show_schema=show_schema)
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.command("read")
def read(
    json_file: JsonOption,
    schema: SchemaOption,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Path to save the typed result as JSON")
    ] = None,
) -> None:
    """
    Read a JSON document and print the typed result.

    Example:
        structured-reader read \\
            --json widgets.json \\
            --schema widgets.schema.json \\
            --output result.json
    """
    try:
        read_command(json_path=json_file, schema_path=schema, output_path=output)
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.command("select")
def select(
    json_file: JsonOption,
    schema: SchemaOption,
    pattern: Annotated[
        str,
        typer.Option("--pattern", "-p", help="Glob over paths, e.g. '.widgets[*].price'")
    ],
) -> None:
    """
    Print the first value whose path matches a glob pattern.

    Example:
        structured-reader select \\
            --json widgets.json \\
            --schema widgets.schema.json \\
            --pattern '.widgets[*].price'
    """
    try:
        select_command(json_path=json_file, schema_path=schema, pattern=pattern)
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """
    structured-reader - Typed reading and validation of JSON documents.
    """
    if version:
        from structured_reader import __version__
        typer.echo(f"structured-reader version {__version__}")
        raise typer.Exit()

    setup_logging("DEBUG" if verbose else "WARNING")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def cli() -> None:
    """CLI entry point for the console script."""
    app()


if __name__ == "__main__":
    cli()
