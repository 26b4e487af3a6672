from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from kvini.cli.ui.formatters import (
    render_check_result,
    render_error,
    render_mapping_table,
    render_parse_error,
)

THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "error": "bold red",
        "muted": "dim",
        "path": "cyan",
        "key": "bold",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    err_console: Console
    verbose: bool = False


def setup_logging(console: Console, *, verbose: bool) -> None:
    """Route kvini loggers to rich; debug output only with --verbose."""
    logger = logging.getLogger("kvini")
    logger.handlers.clear()
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def get_ui(*, verbose: bool = False) -> UI:
    console = Console(theme=THEME)
    err_console = Console(theme=THEME, stderr=True)
    setup_logging(err_console, verbose=verbose)
    return UI(console=console, err_console=err_console, verbose=verbose)


__all__ = [
    "UI",
    "get_ui",
    "render_check_result",
    "render_error",
    "render_mapping_table",
    "render_parse_error",
    "setup_logging",
]
