#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from collections.abc import Callable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from neuralforge.helpers.dto.processing_dto import ChunkProcessingResult, ElbowResult, ItemFailure, NormalizeResult

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"

# Failures listed before the rest is summarized as "+N more"
MAX_LISTED_FAILURES = 10


class InfoPanel:
    """
    Simple panel for displaying status/info without progress tracking.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


class TableDisplay:
    """
    Formatted tables for lists (projects, WCSS curves).
    """

    @staticmethod
    def show_projects(names: list[str], projects_root: str):
        """Display the projects found under a projects root."""
        table = Table(title=f"Projects in {projects_root}", box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("#", style=COLOR_INFO, width=4)
        table.add_column("Project", overflow="fold")
        for i, name in enumerate(names, start=1):
            table.add_row(str(i), name)
        console.print(table)

    @staticmethod
    def show_elbow(result: ElbowResult):
        """Display WCSS per k, highlighting the chosen k."""
        table = Table(title="Elbow Method", box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("k", style=COLOR_INFO, width=4)
        table.add_column("WCSS", justify="right")
        for k, wcss in enumerate(result.wcss_values, start=1):
            marker = f" [bold {COLOR_SUCCESS}]← optimal[/bold {COLOR_SUCCESS}]" if k == result.optimal_k else ""
            table.add_row(str(k), f"{wcss:.4f}{marker}")
        console.print(table)


def format_failures(failures: list[ItemFailure]) -> str:
    """One line per failure, capped at MAX_LISTED_FAILURES."""
    lines = [
        f"[{COLOR_ERROR}]•[/{COLOR_ERROR}] {escape(f.item)}: {escape(f.error)}" for f in failures[:MAX_LISTED_FAILURES]
    ]
    if len(failures) > MAX_LISTED_FAILURES:
        lines.append(f"[dim]+{len(failures) - MAX_LISTED_FAILURES} more (see log.error)[/dim]")
    return "\n".join(lines)


def show_normalize_result(result: NormalizeResult):
    """Summarize a normalization run."""
    content = (
        f"[bold]Copied:[/bold] {len(result.copied)}\n"
        f"[bold]Transcoded:[/bold] {len(result.transcoded)}\n"
        f"[bold]Already present:[/bold] {len(result.skipped)}\n"
        f"[bold]Collisions dropped:[/bold] {len(result.collisions)}\n"
        f"[bold]Failed:[/bold] {len(result.failures)}"
    )
    if result.failures:
        content += "\n\n" + format_failures(result.failures)
    InfoPanel.show("Convert to WAV", content, COLOR_SUCCESS if result.ok else COLOR_WARNING)


def show_chunk_result(result: ChunkProcessingResult, title: str = "Chunks & Spectrograms"):
    """Summarize a segment + spectrogram run."""
    content = (
        f"[bold]Segments handled:[/bold] {len(result.hashes)}\n"
        f"[bold]New records:[/bold] {result.recorded}\n"
        f"[bold]Duplicates:[/bold] {result.duplicates}\n"
        f"[bold]Failed:[/bold] {len(result.failures)}"
    )
    if result.failures:
        content += "\n\n" + format_failures(result.failures)
    InfoPanel.show(title, content, COLOR_SUCCESS if result.ok else COLOR_WARNING)


def show_spinner(message: str, task_fn: Callable, *args, **kwargs):
    """
    Show a spinner while executing a task.
    Returns the result of task_fn.
    """
    with console.status(f"[bold {COLOR_INFO}]{message}[/bold {COLOR_INFO}]"):
        return task_fn(*args, **kwargs)


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {escape(message)}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {escape(message)}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {escape(message)}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[bold {COLOR_INFO}]ℹ[/bold {COLOR_INFO}] {escape(message)}")
