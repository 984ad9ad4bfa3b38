"""
Display helper functions for the hostblock CLI
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from rich.console import Console
from rich.table import Table

from ..editor import Entry

console = Console()
err_console = Console(stderr=True)


def display_entries(entries: List[Entry], hosts_file: Path) -> None:
    """Pretty-print the managed entries as an address → names table."""
    if not entries:
        display_info(f"No managed entries in {hosts_file}")
        return

    table = Table(title=f"Managed entries in {hosts_file}", header_style="bold magenta")
    table.add_column("Address", style="cyan", no_wrap=True)
    table.add_column("Names", style="yellow")

    for entry in entries:
        table.add_row(entry.value, entry.key or "[dim]-[/dim]")

    console.print(table)


def display_preview(text: str | None) -> None:
    """Show the text a dry run would write."""
    if text is None:
        display_info("No changes")
        return
    # Preserve the exact content, no markup interpretation
    console.print(text.replace("\r\n", "\n"), markup=False, highlight=False, end="")


def display_success(message: str):
    """Display success message"""
    console.print(f"[green]✅ {message}[/green]")


def display_error(message: str):
    """Display error message"""
    err_console.print(f"[red]❌ {message}[/red]")


def display_info(message: str):
    """Display info message"""
    console.print(f"[blue]ℹ️  {message}[/blue]")
