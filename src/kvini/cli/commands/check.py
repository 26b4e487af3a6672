from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from kvini.cli.ui import get_ui, render_check_result
from kvini.cli.utils.loading import entries_or_exit, print_config_sources, resolve_config


def check_cmd(
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="ini-file to validate."
    ),
    encoding: Optional[str] = typer.Option(
        None, "--encoding", "-e", help="Code page of ini-file (default: BOM or utf-8)."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Validate ini-file syntax (exit 2 with line number on error)."""
    ui = get_ui(verbose=verbose)
    cfg = resolve_config(ui, path, {"load": {"encoding": encoding}})
    if ui.verbose:
        print_config_sources(ui, cfg)

    entries = entries_or_exit(ui, path, cfg)
    render_check_result(ui.console, path, entries, verbose=ui.verbose)
