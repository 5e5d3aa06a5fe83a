"""
Error Handler - Error, warning and info panels.

This module provides consistent error display across commands with
short context and suggestions for the common failure kinds.
"""

import traceback
from typing import List, Optional

from rich.markup import escape
from rich.panel import Panel

from anistream.core.exceptions import (
    AniStreamError,
    ConfigurationError,
    NetworkError,
    ParseError,
    PluginError,
)
from anistream.ui.console import get_console


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    def _suggestions(self, error: Exception) -> List[str]:
        if isinstance(error, ConfigurationError):
            return [
                "Check the settings file syntax",
                "Delete the settings file to regenerate defaults",
            ]
        if isinstance(error, NetworkError):
            return [
                "Check your internet connection",
                "Try another mirror with [cyan]--domain[/cyan]",
            ]
        if isinstance(error, (ParseError, PluginError)):
            return ["The site layout may have changed; run with [cyan]--debug[/cyan] for details"]
        return []

    def _title(self, error: Exception) -> str:
        if isinstance(error, ConfigurationError):
            return "⚙️  Configuration Error"
        if isinstance(error, NetworkError):
            return "🌐 Network Error"
        if isinstance(error, AniStreamError):
            return "❌ AniStream Error"
        return "💥 Unexpected Error"

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Display an error panel.

        Args:
            error: Exception to display
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        # Pydantic messages contain [type=...] blocks
        content_parts = [f"[error]{escape(str(error))}[/error]"]

        if isinstance(error, ConfigurationError) and error.config_path:
            content_parts.append(f"\n[muted]Configuration file:[/muted] [secondary]{error.config_path}[/secondary]")

        if isinstance(error, NetworkError) and error.url:
            status = f" (HTTP {error.status_code})" if error.status_code else ""
            content_parts.append(f"\n[muted]URL:[/muted] [secondary]{error.url}[/secondary]{status}")

        if context:
            content_parts.append(f"\n[muted]Context:[/muted] {context}")

        suggestions = self._suggestions(error)
        if suggestions:
            content_parts.append("\n\n[info]💡 Suggestions:[/info]")
            for suggestion in suggestions:
                content_parts.append(f"• {suggestion}")

        if show_traceback:
            content_parts.append(f"\n\n[muted]{''.join(traceback.format_exception(type(error), error, error.__traceback__))}[/muted]")

        get_console().print(Panel(
            "\n".join(content_parts),
            title=self._title(error),
            border_style="red",
            padding=(1, 2)
        ))

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning message."""
        get_console().print(Panel(
            f"[warning]{escape(message)}[/warning]",
            title=f"[warning]{title}[/warning]",
            border_style="yellow",
            padding=(1, 2)
        ))


# Global error handler instance
_error_handler = ErrorHandler()


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """Handle and display an error using the global error handler."""
    _error_handler.handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    """Display a warning message using the global error handler."""
    _error_handler.display_warning(message, title)


__all__ = [
    "ErrorHandler",
    "handle_error",
    "display_warning",
]
