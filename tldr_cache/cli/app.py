"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from tldr_cache import __version__
from tldr_cache.core.cache_manager import CacheManager
from tldr_cache.storage.config_manager import ConfigManager

from .formatters import print_command_info, print_config, print_page, print_status

console = Console()

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("tldr_cache")

app = typer.Typer(
    name="tldr-cache",
    help=(
        "An offline cache of tldr command pages. Use 'tldr-cache <command> --help'"
        " for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "tldr-cache"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_manager(lang: str | None = None) -> CacheManager:
    config = ConfigManager(CONFIG_FILE).load_config({"language": lang})
    return CacheManager.from_config(config)


def _ensure_cache(manager: CacheManager) -> None:
    """Downloads the cache on first use."""
    if not manager.store.has_index():
        console.print("[cyan]No local cache yet, downloading tldr pages...[/cyan]")
        asyncio.run(manager.update_cache())


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """tldr page cache CLI"""
    if version:
        console.print(f"[bold]tldr-cache[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose >= 2:
        log_level = "DEBUG"
    elif verbose == 1:
        log_level = "INFO"
    logging.getLogger("tldr_cache").setLevel(log_level)

    if show_config:
        config = ConfigManager(CONFIG_FILE).load_config()
        config_data = config.model_dump(exclude={"config_path"})
        print_config(CONFIG_FILE, config_data)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    lang: str = typer.Option("en", "--lang", "-l", help="Preferred page language."),
    cache_dir: str | None = typer.Option(
        None, "--cache-dir", help="Where pages are cached (default ~/.tldr/cache)."
    ),
    archive_url: str | None = typer.Option(
        None, "--archive-url", help="URL of the tldr pages zip archive."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration."
    ),
):
    """Write a configuration file."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {
        key: value
        for key, value in {
            "language": lang,
            "cache_dir": cache_dir,
            "archive_url": archive_url,
        }.items()
        if value is not None
    }
    ConfigManager(CONFIG_FILE).save_new_config(settings)
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command()
def update(
    force: bool = typer.Option(
        False, "--force", "-f", help="Download the archive even if a cache exists."
    ),
):
    """Download the tldr archive and rebuild the local cache."""
    manager = _load_manager()
    if force:
        console.print(f"[cyan]Downloading '{manager.archive_url}'...[/cyan]")
    refreshed = asyncio.run(manager.update_cache(force_refresh=force))
    print_status(console, manager.status, refreshed)
    if not manager.status.ok:
        raise typer.Exit(code=1)


@app.command(name="list")
def list_command():
    """List every cached command."""
    manager = _load_manager()
    _ensure_cache(manager)
    names = manager.commands()
    for name in names:
        console.print(name, markup=False, highlight=False)
    log.info(f"{len(names)} commands cached.")


@app.command()
def show(
    name: str = typer.Argument(..., help="Command to show the page for."),
    lang: str | None = typer.Option(
        None, "--lang", "-l", help="Preferred language for this lookup."
    ),
    raw: bool = typer.Option(False, "--raw", help="Print the Markdown source."),
):
    """Show the page for a command."""
    manager = _load_manager(lang)
    _ensure_cache(manager)
    page = manager.man(name)
    if not page:
        console.print(f"[yellow]No documentation for '{name}'.[/yellow]")
        raise typer.Exit(code=1)
    if raw:
        console.print(page, markup=False, highlight=False)
    else:
        print_page(console, page)


@app.command()
def info(name: str = typer.Argument(..., help="Command to describe.")):
    """Show the manifest entry for a command."""
    manager = _load_manager()
    _ensure_cache(manager)
    metadata = manager.command(name)
    if metadata is None:
        console.print(f"[yellow]'{name}' is not in the cache.[/yellow]")
        raise typer.Exit(code=1)
    print_command_info(console, metadata)


@app.command()
def clear():
    """Delete every cached page and the manifest."""
    manager = _load_manager()
    console.print("[cyan]Clearing page cache...[/cyan]")
    removed = manager.clear_cache()
    console.print(
        f"[green]✓ Cache cleared successfully ({removed} entries removed).[/green]"
    )
