"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tldr_cache.models.command import CommandMetadata
from tldr_cache.models.status import RefreshStatus
from tldr_cache.utils.formatting import format_timestamp


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "IndexCorruptError": [
            "• The cache has not been downloaded yet, or is damaged.",
            "• Run `tldr-cache update --force` to rebuild it.",
        ],
        "PageNotFoundError": [
            "• The manifest and the cached pages are out of sync.",
            "• Run `tldr-cache update --force` to rebuild the cache.",
        ],
        "BusyError": [
            "• Another refresh is already running.",
            "• Wait for it to finish and try again.",
        ],
        "FetchError": [
            "• A network connection issue occurred.",
            "• Check that the archive URL in your configuration is reachable.",
        ],
        "ExtractionError": [
            "• The downloaded archive could not be unpacked.",
            "• Check free disk space and try `tldr-cache update --force` again.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `tldr-cache init --force` to write a fresh one.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_page(console: Console, page: str) -> None:
    """Renders a tldr page as Markdown."""
    console.print(Markdown(page))


def print_command_info(console: Console, metadata: CommandMetadata) -> None:
    """Displays the manifest entry for a single command."""
    table = Table(title=f"[bold]{metadata.name}[/bold]", box=box.ROUNDED)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Platforms", ", ".join(metadata.platform))
    table.add_row("Languages", ", ".join(metadata.language))
    targets = ", ".join(f"{t.os}/{t.language}" for t in metadata.target)
    table.add_row("Targets", targets or "[dim]none[/dim]")
    console.print(table)


def print_status(console: Console, status: RefreshStatus, refreshed: bool) -> None:
    """Summarizes the outcome of an update."""
    if refreshed:
        console.print("[green]✓ Cache refreshed successfully.[/green]")
    elif not status.ok:
        console.print(f"[red]✗ Cache refresh failed:[/red] {status.last_error}")
    else:
        console.print("[cyan]Cache is already present, nothing to do.[/cyan]")
        console.print("[dim]Use --force to download it again.[/dim]")
    console.print(
        f"[dim]Last success: {format_timestamp(status.last_success_at)}[/dim]"
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )
