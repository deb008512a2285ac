# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI output helpers.

All user-facing diagnostics go to stderr so generated output piped from
stdout (dry runs) stays clean.
"""

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True, soft_wrap=True)


def error(message: str, details: list[str] | None = None) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    if details:
        for detail in details:
            console.print(f"  • {escape(detail)}")


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")
