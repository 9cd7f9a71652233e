"""Public API for the cxmcp TUI package."""

from .app import run_interactive
from .renderer import console, display_server_list
from .selector import MenuItem, Selector, confirm

__all__ = ["MenuItem", "Selector", "confirm", "console", "display_server_list", "run_interactive"]
