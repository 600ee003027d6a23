"""Rich console output shared by the generator and the CLI."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()

# action -> (label, colour)
FILE_ACTIONS: dict[str, tuple[str, str]] = {
    "create": ("create", "green"),
    "force": ("force", "yellow"),
    "skip": ("skip", "blue"),
    "update": ("update", "cyan"),
    "remove": ("remove", "red"),
    "missing": ("not found", "yellow"),
}


def info(message: str) -> None:
    console.print(message, highlight=False)


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}", highlight=False)


def warning(message: str) -> None:
    console.print(f"[bold yellow]{message}[/bold yellow]", highlight=False)


def error(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def next_steps(*steps: str) -> None:
    """Numbered follow-up commands in a panel."""
    lines = "\n".join(f"  {i}. {escape(step)}" for i, step in enumerate(steps, 1))
    console.print(Panel(f"[bold]Next steps:[/bold]\n{lines}", title="Done"), highlight=False)


def file_action(action: str, path: str | Path, dry_run: bool = False) -> None:
    """One `  create  app/posts/page.tsx` style line."""
    label, colour = FILE_ACTIONS[action]
    prefix = "[dim]\\[dry-run][/dim] " if dry_run else ""
    console.print(f"{prefix}[bold {colour}]{label:>10}[/bold {colour}]  {escape(str(path))}", highlight=False)
