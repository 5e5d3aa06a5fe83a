"""
UI Layer - Rich console output.

This module contains the console setup, result tables and error panels
used by the command line front end.
"""

from anistream.ui.components import UIComponents, status_spinner
from anistream.ui.console import get_console, setup_console
from anistream.ui.error_handler import ErrorHandler, handle_error, display_warning

__all__ = [
    # Core UI Components
    "UIComponents",
    "status_spinner",
    # Error Handling
    "ErrorHandler",
    "handle_error",
    "display_warning",
    # Console Management
    "get_console",
    "setup_console",
]
