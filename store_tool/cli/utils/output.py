# store_tool/cli/utils/output.py
"""Output formatting utilities"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS
from ...models import OperationResult

console = Console()


def format_operation_result(title: str, result: OperationResult, success_message: str) -> None:
    """Format and display a configure or package result"""
    if result.is_success:
        lines = [f"[green]{EMOJI_SUCCESS}[/green] {success_message}"]
        if result.output_dir:
            lines.append("")
            lines.append(f"[bold]Output:[/bold] {result.output_dir}")

        console.print(Panel("\n".join(lines), title=title, border_style="green"))
    else:
        console.print(Panel(
            f"[red]{EMOJI_ERROR} {title} failed[/red] with exit code {result.exit_code}",
            title=f"{title} Error",
            border_style="red"
        ))


def format_publish_result(exit_code: int) -> None:
    """Format and display a publish result"""
    if exit_code == 0:
        console.print(Panel(
            f"[green]{EMOJI_SUCCESS}[/green] Submission completed successfully!",
            title="Publish Result",
            border_style="green"
        ))
    else:
        console.print(Panel(
            f"[red]{EMOJI_ERROR} Publish failed[/red] with exit code {exit_code}",
            title="Publish Error",
            border_style="red"
        ))


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        console.print(f"[red]Error:[/red] {escape(message)}: {escape(str(error))}")
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]Success:[/green] {escape(message)}")
