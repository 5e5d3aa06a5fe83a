"""
UI Components - Result tables and status indicators.

This module renders search results, episode lists and resolved sources
as Rich tables with consistent styling.
"""

from contextlib import contextmanager
from typing import Iterator, List

from rich.status import Status
from rich.table import Table

from anistream.core.models import Episode, SearchResult, StreamingSource
from anistream.ui.console import get_console


class UIComponents:
    """Collection of standardized UI components."""

    def __init__(self, show_urls: bool = True):
        """
        Initialize UI components.

        Args:
            show_urls: Whether tables include URL columns
        """
        self.show_urls = show_urls

    def _table(self, title: str) -> Table:
        return Table(
            title=title,
            show_header=True,
            header_style="bold cyan",
            border_style="blue",
            expand=True
        )

    def create_search_results_table(self, results: List[SearchResult]) -> Table:
        """
        Create a table displaying search results.

        Args:
            results: List of search results

        Returns:
            Formatted table with one row per result
        """
        table = self._table("🔍 Search Results")

        table.add_column("#", style="dim", width=4)
        table.add_column("Title", style="primary", min_width=30)
        table.add_column("ID", style="secondary")
        if self.show_urls:
            table.add_column("URL", style="muted", overflow="fold")

        for i, result in enumerate(results, 1):
            row = [str(i), result.title, result.id]
            if self.show_urls:
                row.append(result.url)
            table.add_row(*row)

        return table

    def create_episodes_table(self, episodes: List[Episode]) -> Table:
        """Create a table displaying an episode list."""
        table = self._table("📺 Episodes")

        table.add_column("#", style="dim", width=6)
        table.add_column("Episode ID", style="secondary")

        for episode in episodes:
            table.add_row(str(episode.number), episode.id)

        return table

    def create_sources_table(self, sources: List[StreamingSource]) -> Table:
        """Create a table displaying resolved sources and their subtitles."""
        table = self._table("▶️  Sources")

        table.add_column("Server", style="primary")
        table.add_column("Type", style="secondary", width=5)
        table.add_column("Quality", width=8)
        if self.show_urls:
            table.add_column("URL", style="muted", overflow="fold")
        table.add_column("Subtitles", style="muted")

        for source in sources:
            subtitles = ", ".join(track.label for track in source.subtitles) or "-"
            for quality in source.qualities:
                row = [source.label, source.type.value, quality.quality]
                if self.show_urls:
                    row.append(quality.url)
                row.append(subtitles)
                table.add_row(*row)

        return table


@contextmanager
def status_spinner(message: str, spinner: str = "dots") -> Iterator[Status]:
    """Simple status spinner context manager."""
    status = Status(message, spinner=spinner, console=get_console())

    try:
        status.start()
        yield status
    finally:
        status.stop()


__all__ = ["UIComponents", "status_spinner"]
