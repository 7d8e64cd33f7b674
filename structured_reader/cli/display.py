"""
Rich terminal display utilities for CLI.

Provides formatted output using the Rich library for:
- Syntax-highlighted JSON
- Validation error tables
- Success/failure indicators
"""

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from structured_reader.validation.validator import ValidationError

console = Console()


def print_header(title: str) -> None:
    """Print a formatted header."""
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))
    console.print()


def print_success(message: str) -> None:
    """Print a success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message with X mark."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def to_json(data: Any) -> str:
    """
    Serialize a read result as indented JSON.

    Records become objects and datetimes become ISO-8601 strings.
    """
    return json.dumps(to_plain(data), indent=2)


def to_plain(data: Any) -> Any:
    """Convert read results (records, lists, datetimes) into JSON-compatible values."""
    if is_dataclass(data) and not isinstance(data, type):
        return to_plain(asdict(data))
    if isinstance(data, dict):
        return {key: to_plain(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(value) for value in data]
    if isinstance(data, (datetime, date)):
        return data.isoformat()
    return data


def print_json(data: Any, title: Optional[str] = None) -> None:
    """
    Print JSON data with syntax highlighting.

    Args:
        data: Read result, JSON-compatible data, or a JSON string
        title: Optional title for the panel
    """
    json_str = data if isinstance(data, str) else to_json(data)

    syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)

    if title:
        console.print(Panel(syntax, title=f"[bold]{escape(title)}[/bold]", border_style="cyan"))
    else:
        console.print(syntax)


def print_validation_errors(errors: List[ValidationError]) -> None:
    """
    Print validation errors as a table of path and reason.

    Args:
        errors: Errors in traversal order
    """
    if not errors:
        return

    table = Table(title="Validation Errors", show_header=True, header_style="bold red")
    table.add_column("#", style="dim", width=4)
    table.add_column("Path", style="cyan")
    table.add_column("Reason", style="white")

    for i, error in enumerate(errors, 1):
        table.add_row(str(i), escape(error.path or "root"), escape(error.reason))

    console.print()
    console.print(table)
    console.print()


def print_separator() -> None:
    """Print a visual separator line."""
    console.print("[dim]" + "─" * 70 + "[/dim]")
