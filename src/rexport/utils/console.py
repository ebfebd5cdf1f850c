"""
Rich console helpers for operator-facing output.

Errors and warnings go to stderr so command output stays pipeable.
"""

from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def success(message: str):
    console.print(f"✔ {message}", style="bold green")


def error(message: str):
    err_console.print(f"✖ {message}", style="bold red")


def warning(message: str):
    err_console.print(f"⚠  {message}", style="bold yellow")


def info(message: str):
    console.print(message, style="cyan")


def create_table(title: str, columns: List[str]) -> Table:
    """Table whose first column is styled as a key column"""
    table = Table(title=title, show_header=True, header_style="bold blue")
    for index, column in enumerate(columns):
        if index == 0:
            table.add_column(column, style="cyan", no_wrap=True)
        else:
            table.add_column(column)
    return table


def display_panel(content: str, title: str, style: str = "blue"):
    console.print(Panel(content, title=title, border_style=style))
