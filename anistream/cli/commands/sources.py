"""
Sources Command - Resolve playable streams for an episode.

This module implements the sources command, which prints one row per
resolved server along with its subtitle tracks.
"""

import asyncio
from typing import List, Optional

import typer

from anistream.cli import context
from anistream.cli.output import emit_json, show_urls, wants_json
from anistream.core.models import StreamingSource
from anistream.ui import UIComponents, display_warning, get_console, status_spinner


async def _fetch_sources(episode_id: str, parallel: Optional[bool]) -> List[StreamingSource]:
    async with context.create_plugin(parallel_servers=parallel) as plugin:
        return await plugin.fetch_sources(episode_id)


def sources(
    episode_id: str = typer.Argument(..., help="Episode id from the episodes command"),
    parallel: Optional[bool] = typer.Option(
        None,
        "--parallel/--sequential",
        help="Resolve servers concurrently (default from settings)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print sources as JSON"),
) -> None:
    """
    ▶️  Resolve playable sources for an episode.

    Examples:

        anistream sources "naruto-677?ep=12345"

        anistream sources 12345 --parallel --json
    """
    as_json = wants_json(json_output)

    if as_json:
        results = asyncio.run(_fetch_sources(episode_id, parallel))
    else:
        with status_spinner(f"Resolving sources for '{episode_id}'..."):
            results = asyncio.run(_fetch_sources(episode_id, parallel))

    if not results:
        display_warning(f"No playable sources found for '{episode_id}'.", "▶️  No Sources")
        raise typer.Exit(1)

    if as_json:
        emit_json(results)
    else:
        get_console().print(UIComponents(show_urls=show_urls()).create_sources_table(results))


__all__ = ["sources"]
