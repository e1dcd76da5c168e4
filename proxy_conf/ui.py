"""Colorized console output for proxy-conf commands.

Thin wrapper around :mod:`rich`.  All user-facing status messages flow
through this module; ``logger.*`` calls are kept for diagnostics.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Shared console: auto-detects TTY; force_terminal=None lets Rich decide.
console = Console(stderr=False, force_terminal=None)

# ── Symbols ────────────────────────────────────────────────────────────────

_PASS = "[bold green]✓[/]"
_FAIL = "[bold red]✗[/]"
_ARROW = "[bold cyan]›[/]"

# ── Status lines ───────────────────────────────────────────────────────────


def ok(msg: str) -> None:
    """Green checkmark + message."""
    console.print(f"  {_PASS} {escape(msg)}")


def fail(msg: str) -> None:
    """Red cross + message."""
    console.print(f"  {_FAIL} [red]{escape(msg)}[/]")


def step(msg: str) -> None:
    """Cyan arrow + action message (in-progress)."""
    console.print(f"  {_ARROW} {escape(msg)}")


# ── Banners / panels ──────────────────────────────────────────────────────


def error_panel(title: str, body: str) -> None:
    """Red-bordered error panel."""
    console.print()
    console.print(
        Panel(
            escape(body),
            title=f"[bold red]{title}[/]",
            border_style="red",
            padding=(1, 2),
        )
    )


def placeholder_table(rows: list[tuple[str, str, str]]) -> None:
    """Render (name, argument, line) rows as a table."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Argument")
    table.add_column("Line", justify="right")
    for name, argument, line in rows:
        table.add_row(escape(name), escape(argument), line)
    console.print(table)
