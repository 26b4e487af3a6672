from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from kvini.cli.ui import UI, render_error, render_parse_error
from kvini.core.config import LoadedConfig, load_tool_config
from kvini.core.errors import ConfigError, ExitCode, IniLoadError
from kvini.core.loader import read_ini_text
from kvini.parsers.errors import IniParseError
from kvini.parsers.ini_parser import parse_ini_entries
from kvini.parsers.types import IniEntry


def resolve_config(
    ui: UI, path: Path, cli_overrides: Optional[Dict[str, Any]] = None
) -> LoadedConfig:
    """Tool config for an ini-file: searched from the file directory upward."""
    try:
        return load_tool_config(start_dir=path.resolve().parent, cli_overrides=cli_overrides)
    except ConfigError as e:
        render_error(ui.err_console, e, verbose=ui.verbose)
        raise typer.Exit(code=int(ExitCode.ERROR))


def entries_or_exit(ui: UI, path: Path, cfg: LoadedConfig) -> List[IniEntry]:
    """Read and parse ini-file; render error and exit with ExitCode.ERROR on failure."""
    try:
        text = read_ini_text(
            path, cfg.load.encoding, max_file_bytes=cfg.load.max_file_bytes
        )
        return parse_ini_entries(text)
    except IniLoadError as e:
        render_error(ui.err_console, e, verbose=ui.verbose)
        raise typer.Exit(code=int(ExitCode.ERROR))
    except IniParseError as e:
        render_parse_error(ui.err_console, path, e)
        raise typer.Exit(code=int(ExitCode.ERROR))


def print_config_sources(ui: UI, cfg: LoadedConfig) -> None:
    ui.err_console.print("[bold]Config sources:[/bold]")
    ui.err_console.print(f"  global: {cfg.global_path or '-'}")
    ui.err_console.print(f"  repo:   {cfg.repo_path or '-'}")
