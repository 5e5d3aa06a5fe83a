"""
Console - Shared Rich console for command output.

Tables, panels and spinners all print through one console so that the
--no-color flag and the theme apply everywhere.
"""

from typing import Optional

from rich.console import Console
from rich.theme import Theme


ANISTREAM_THEME = Theme({
    "primary": "bold blue",
    "secondary": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
    "info": "blue",
    "muted": "dim white",
})

_console: Optional[Console] = None


def setup_console(no_color: bool = False, width: Optional[int] = None) -> Console:
    """
    Replace the shared console.

    Args:
        no_color: Strip colors and styles from all output
        width: Fixed output width; detected from the terminal when None

    Returns:
        The new console
    """
    global _console
    _console = Console(theme=ANISTREAM_THEME, no_color=no_color, width=width)
    return _console


def get_console() -> Console:
    """Shared console, created with defaults on first use."""
    if _console is None:
        return setup_console()
    return _console


__all__ = [
    "ANISTREAM_THEME",
    "setup_console",
    "get_console",
]
