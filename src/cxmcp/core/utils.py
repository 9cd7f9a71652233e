"""Logging setup, path shortening, command formatting."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterable
from pathlib import Path

from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Route the package's loggers through Rich; DEBUG when verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("cxmcp")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, show_time=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False


def short_cwd(p: Path) -> str:
    """Return path relative to home directory, using ~ prefix."""
    try:
        rel = p.relative_to(Path.home())
        return f"~/{rel}" if str(rel) != "." else "~"
    except ValueError:
        return str(p)


def format_command(command: str, args: Iterable[str] = ()) -> str:
    """Render a command line for display, quoting args that need it."""
    parts = [command, *args]
    return " ".join(shlex.quote(p) for p in parts)
