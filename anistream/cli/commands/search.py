"""
Search Command - Find titles by keyword.

This module implements the search command, which prints matching titles
with the ids accepted by the episodes command.
"""

import asyncio
from typing import List, Optional

import typer

from anistream.cli import context
from anistream.cli.output import emit_json, show_urls, wants_json
from anistream.core.models import SearchResult
from anistream.ui import UIComponents, display_warning, get_console, status_spinner


async def _perform_search(query: str) -> List[SearchResult]:
    async with context.create_plugin() as plugin:
        return await plugin.search(query)


def search(
    query: str = typer.Argument(..., help="Title to search for"),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum number of results to display",
        min=1,
    ),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """
    🔍 Search for titles by keyword.

    Examples:

        anistream search "naruto"

        anistream search "one piece" --limit 5 --json
    """
    as_json = wants_json(json_output)

    if as_json:
        results = asyncio.run(_perform_search(query))
    else:
        with status_spinner(f"Searching for '{query}'..."):
            results = asyncio.run(_perform_search(query))

    if not results:
        display_warning(f"No results found for '{query}'.", "🔍 No Results")
        raise typer.Exit(1)

    if limit:
        results = results[:limit]

    if as_json:
        emit_json(results)
    else:
        get_console().print(UIComponents(show_urls=show_urls()).create_search_results_table(results))


__all__ = ["search"]
