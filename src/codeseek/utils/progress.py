"""Console output and progress reporting shared by the CLI and MCP server."""

import sys
from typing import Any, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

# ASCII fallbacks for legacy Windows code pages
_ASCII_ONLY = bool(sys.stdout.encoding) and sys.stdout.encoding.lower() in ('cp1252', 'cp850', 'ascii')

SYMBOLS = {
    'info': 'i' if _ASCII_ONLY else 'ℹ',
    'warning': '!' if _ASCII_ONLY else '⚠',
    'error': 'X' if _ASCII_ONLY else '✗',
    'success': 'v' if _ASCII_ONLY else '✓',
}

# stderr keeps stdout free for answers and for the MCP stdio protocol
console = Console(stderr=True, legacy_windows=False)
error_console = Console(stderr=True, legacy_windows=False)


def create_progress_bar(description: str = "Processing", total: Optional[int] = None) -> tuple[Progress, TaskID]:
    """Create a progress bar.

    Args:
        description: Description text for the progress bar
        total: Total number of items (None for indeterminate)

    Returns:
        Tuple of (Progress instance, TaskID) for updating
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )

    task_id = progress.add_task(description, total=total)
    return progress, task_id


def update_progress(
    progress: Progress,
    task_id: TaskID,
    advance: int = 1,
    description: Optional[str] = None,
) -> None:
    """Advance a progress bar, optionally replacing its description."""
    if description:
        progress.update(task_id, description=description)
    progress.advance(task_id, advance)


def log_info(message: str, **kwargs: Any) -> None:
    console.print(f"[blue]{SYMBOLS['info']}[/blue] {message}", **kwargs)


def log_warning(message: str, **kwargs: Any) -> None:
    console.print(f"[yellow]{SYMBOLS['warning']}[/yellow] {message}", **kwargs)


def log_error(message: str, **kwargs: Any) -> None:
    error_console.print(f"[red]{SYMBOLS['error']}[/red] {message}", **kwargs)


def log_success(message: str, **kwargs: Any) -> None:
    console.print(f"[green]{SYMBOLS['success']}[/green] {message}", **kwargs)
