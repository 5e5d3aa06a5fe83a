"""
CLI Main Application - Typer app entry point.

This module provides the main CLI application: global options, logging
setup, configuration loading and command registration.
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import typer

from anistream import __version__
from anistream.cli import context
from anistream.core import ConfigManager
from anistream.core.config_schemas import LoggingSettings
from anistream.core.exceptions import AniStreamError, ConfigurationError
from anistream.plugins.hianime import validate_config
from anistream.ui import get_console, handle_error, setup_console


# Create main Typer application
app = typer.Typer(
    name="anistream",
    help="🎬 Search HiAnime, list episodes and resolve playable streams",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        get_console().print(f"[bold blue]AniStream[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version information and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory path",
        file_okay=False,
        dir_okay=True,
    ),
    domain: Optional[str] = typer.Option(
        None,
        "--domain",
        "-d",
        help="Site mirror to use, e.g. hianime.to or hianime.bz",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """
    🎬 AniStream - HiAnime stream resolution client.

    Search for a title, list its episodes, then resolve the playable
    sources of an episode.
    """
    setup_console(no_color=no_color)

    try:
        _initialize_application(config_dir=config_dir, domain=domain, debug=debug)
    except AniStreamError as e:
        handle_error(e, "During application initialization", show_traceback=debug)
        raise typer.Exit(1)


def _initialize_application(
    config_dir: Optional[Path] = None,
    domain: Optional[str] = None,
    debug: bool = False,
) -> None:
    """
    Load configuration, set up logging and validate command line overrides.

    Raises:
        ConfigurationError: If the settings or overrides are invalid
    """
    config_manager = ConfigManager(config_dir or Path("config"))
    context.set_config_manager(config_manager)

    _setup_logging(config_manager.settings.logging, debug)

    context.set_plugin_overrides(domain=domain)
    validate_config({
        **config_manager.get_source_config("hianime"),
        **({"domain": domain} if domain else {}),
    })

    source = config_manager.settings.get_source("hianime")
    if source is not None and not source.enabled:
        raise ConfigurationError(
            "The hianime source is disabled",
            config_path=str(config_manager.settings_file)
        )


def _setup_logging(settings: LoggingSettings, debug: bool = False) -> None:
    """
    Set up application logging.

    Args:
        settings: Logging section of the settings file
        debug: Enable debug logging regardless of the configured level
    """
    level = logging.DEBUG if debug else getattr(logging, settings.level)

    handlers: list = [logging.StreamHandler(sys.stderr)]
    if settings.file:
        handlers.append(logging.FileHandler(settings.file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def _register_commands() -> None:
    """Register query commands with the main app."""
    from anistream.cli.commands import episodes, search, sources

    app.command(name="search")(search.search)
    app.command(name="episodes")(episodes.episodes)
    app.command(name="sources")(sources.sources)


_register_commands()


def cli_main() -> None:
    """
    Main CLI entry point for the anistream command.
    """
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


# Export main components
__all__ = ["app", "cli_main"]
