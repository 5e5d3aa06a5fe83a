"""
Episodes Command - List the episodes of a title.

This module implements the episodes command, which prints episode
numbers with the ids accepted by the sources command.
"""

import asyncio
from typing import List

import typer

from anistream.cli import context
from anistream.cli.output import emit_json, wants_json
from anistream.core.models import Episode
from anistream.ui import UIComponents, display_warning, get_console, status_spinner


async def _fetch_episodes(anime_id: str) -> List[Episode]:
    async with context.create_plugin() as plugin:
        return await plugin.fetch_episodes(anime_id)


def episodes(
    anime_id: str = typer.Argument(..., help="Title id from search, or a watch page URL"),
    json_output: bool = typer.Option(False, "--json", help="Print episodes as JSON"),
) -> None:
    """
    📺 List the episodes of a title.

    Examples:

        anistream episodes naruto-677
    """
    as_json = wants_json(json_output)

    if as_json:
        results = asyncio.run(_fetch_episodes(anime_id))
    else:
        with status_spinner(f"Loading episodes for '{anime_id}'..."):
            results = asyncio.run(_fetch_episodes(anime_id))

    if not results:
        display_warning(f"No episodes found for '{anime_id}'.", "📺 No Episodes")
        raise typer.Exit(1)

    if as_json:
        emit_json(results)
    else:
        get_console().print(UIComponents().create_episodes_table(results))


__all__ = ["episodes"]
