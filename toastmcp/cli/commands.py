"""CLI commands for toastmcp.

``serve`` is what MCP clients launch; the other commands inspect assets,
fire a one-off notification and manage the audio cache from a terminal.
"""

from __future__ import annotations

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from toastmcp import __logo__, __version__
from toastmcp.assets.registry import AssetRegistry
from toastmcp.audio.cache import AudioCache
from toastmcp.cli.shared.logging_utils import configure_stderr_logging, ensure_rotating_log_file
from toastmcp.config.loader import get_config_path, load_config, save_config
from toastmcp.config.schema import Config
from toastmcp.notify.invoker import NotificationInvoker, NotifyInput
from toastmcp.notify.presenter import DesktopPresenter
from toastmcp.server import StdioServer, build_dispatcher
from toastmcp.utils.exceptions import ToastMcpError

app = typer.Typer(
    name="toastmcp",
    help=f"{__logo__} toastmcp - desktop notifications for agents over MCP stdio",
    no_args_is_help=True,
)
cache_app = typer.Typer(help="Manage the normalized-audio cache")
app.add_typer(cache_app, name="cache")
config_app = typer.Typer(help="Create or refresh config.json")
app.add_typer(config_app, name="config")

# Human output goes to stderr; stdout belongs to the protocol in `serve`.
console = Console(stderr=True)

def _config_option():
    return typer.Option(None, "--config", "-c", help="Path to config.json (default ~/.toastmcp/config.json)")


def _load(config_path: Path | None) -> Config:
    try:
        return load_config(config_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} toastmcp v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """toastmcp - desktop notifications for agents."""
    pass


@app.command()
def serve(
    config_path: Path = _config_option(),
    log_level: str = typer.Option(None, "--log-level", "-l", help="Override logging.level (DEBUG, INFO, ...)"),
    log_file: bool = typer.Option(None, "--log-file/--no-log-file", help="Override logging.file"),
):
    """Run the MCP server on stdin/stdout."""
    config = _load(config_path)
    level = log_level or config.logging.level
    configure_stderr_logging(level)
    use_file = config.logging.file if log_file is None else log_file
    if use_file:
        ensure_rotating_log_file("serve", level=level)

    server = StdioServer(build_dispatcher(config))
    logger.info(
        "toastmcp v{} serving on stdio (assets: {})",
        __version__,
        ", ".join(str(d) for d in config.asset_search_dirs),
    )
    try:
        server.serve_forever()
    except ToastMcpError as e:
        logger.error("Transport failure, stopping: {}", e)
        raise typer.Exit(1) from e
    except BrokenPipeError:
        logger.info("Client disconnected")
    except KeyboardInterrupt:
        logger.info("Interrupted")


@app.command()
def assets(config_path: Path = _config_option()):
    """List icon and sound ids the server would offer."""
    config = _load(config_path)
    registry = AssetRegistry(config.asset_search_dirs)
    catalogue = registry.catalogue()

    table = Table(title="toastmcp assets")
    table.add_column("Kind", style="cyan")
    table.add_column("Ids")
    table.add_row("icons", ", ".join(catalogue["icons"]) or "[dim](none)[/dim]")
    table.add_row("sounds", ", ".join(catalogue["sounds"]))
    console.print(table)
    for directory in registry.search_dirs:
        mark = "[green]✓[/green]" if directory.is_dir() else "[dim]✗[/dim]"
        console.print(f"Search dir: {directory} {mark}")


@app.command()
def notify(
    title: str = typer.Argument(..., help="Toast title"),
    message: str = typer.Argument(..., help="Toast body"),
    sound: str = typer.Option("default", "--sound", "-s", help="Sound id"),
    icon: str = typer.Option(..., "--icon", "-i", help="Icon id"),
    config_path: Path = _config_option(),
):
    """Send one notification through the same path as the notify tool."""
    config = _load(config_path)
    invoker = NotificationInvoker(
        registry=AssetRegistry(config.asset_search_dirs),
        cache=AudioCache(config.audio_cache_dir),
        presenter=DesktopPresenter(),
        volume=config.audio.volume,
    )
    try:
        outcome = invoker.notify(NotifyInput(title=title, message=message, sound=sound, icon=icon))
    except ToastMcpError as e:
        console.print(f"[red]Notification failed:[/red] {e.message}")
        raise typer.Exit(1) from e
    if outcome.audio_path is not None:
        console.print(f"[green]✓[/green] Sent with sound file {outcome.audio_path}")
    else:
        console.print(f"[green]✓[/green] Sent with built-in cue {outcome.cue}")


@config_app.command("init")
def config_init(config_path: Path = _config_option()):
    """Write config.json with defaults, or refresh it with any new fields."""
    path = config_path or get_config_path()
    if path.exists():
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        console.print("  [bold]y[/bold] = overwrite with defaults (existing values will be lost)")
        console.print("  [bold]N[/bold] = refresh config, keeping existing values and adding new fields")
        if typer.confirm("Overwrite?"):
            save_config(Config(), path)
            console.print(f"[green]✓[/green] Config reset to defaults at {path}")
        else:
            save_config(_load(path), path)
            console.print(f"[green]✓[/green] Config refreshed at {path} (existing values preserved)")
    else:
        save_config(Config(), path)
        console.print(f"[green]✓[/green] Created config at {path}")


@cache_app.command("clear")
def cache_clear(config_path: Path = _config_option()):
    """Delete cached normalized audio files."""
    config = _load(config_path)
    removed = AudioCache(config.audio_cache_dir).clear()
    console.print(f"[green]✓[/green] Removed {removed} cached file(s) from {config.audio_cache_dir}")


@app.command()
def status(config_path: Path = _config_option()):
    """Show configuration and resolved directories."""
    path = config_path or get_config_path()
    config = _load(config_path)
    console.print(f"{__logo__} toastmcp Status\n")
    console.print(f"Config: {path} {'[green]✓[/green]' if path.exists() else '[dim]defaults[/dim]'}")
    for directory in config.asset_search_dirs:
        console.print(f"Assets: {directory} {'[green]✓[/green]' if directory.is_dir() else '[dim]missing[/dim]'}")
    console.print(f"Cache: {config.audio_cache_dir}")
    console.print(f"Volume: {config.audio.volume}")
    console.print(f"Protocol default: {config.server.protocol_version}")


if __name__ == "__main__":
    app()
