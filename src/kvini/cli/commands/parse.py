from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.markup import escape

from kvini.cli.ui import get_ui, render_mapping_table
from kvini.cli.ui.formatters import MappingRenderOptions
from kvini.cli.utils.loading import entries_or_exit, print_config_sources, resolve_config
from kvini.core.errors import ExitCode
from kvini.core.models import OutputFormat
from kvini.core.options import RunOptions, parse_overrides
from kvini.core.writer import dump_ini, dump_json, dump_yaml


def _overrides_or_exit(items: List[str]) -> Dict[str, str]:
    try:
        return parse_overrides(items)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--set")


def parse_cmd(
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="ini-file to parse."
    ),
    encoding: Optional[str] = typer.Option(
        None, "--encoding", "-e", help="Code page of ini-file, e.g. windows-1252 (default: BOM or utf-8)."
    ),
    fmt: Optional[OutputFormat] = typer.Option(
        None, "--format", "-f", help="Output format (overrides config)."
    ),
    overrides: List[str] = typer.Option(
        [], "--set", help="Override section.key=value (repeatable, wins over ini-file)."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Print section.key => value mapping of an ini-file."""
    ui = get_ui(verbose=verbose)
    cfg = resolve_config(
        ui, path, {"load": {"encoding": encoding}, "output": {"format": fmt}}
    )
    if ui.verbose:
        print_config_sources(ui, cfg)

    entries = entries_or_exit(ui, path, cfg)
    opts = RunOptions.merge(
        {e.composite_key: e.value for e in entries},
        _overrides_or_exit(overrides),
    )
    kv = opts.key_value
    sort_keys = cfg.output.sort_keys

    out_fmt = cfg.output.format
    if out_fmt == OutputFormat.TABLE:
        render_mapping_table(
            ui.console, kv, opts=MappingRenderOptions(title=str(path), sort_keys=sort_keys)
        )
    elif out_fmt == OutputFormat.JSON:
        typer.echo(dump_json(kv, sort_keys=sort_keys), nl=False)
    elif out_fmt == OutputFormat.YAML:
        typer.echo(dump_yaml(kv, sort_keys=sort_keys), nl=False)
    else:
        try:
            typer.echo(dump_ini(kv, sort_keys=sort_keys), nl=False)
        except ValueError as e:
            ui.err_console.print(f"[warn]cannot write ini: {escape(str(e))}[/warn]")
            raise typer.Exit(code=int(ExitCode.ERROR))


def get_cmd(
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="ini-file to read."
    ),
    key: str = typer.Argument(..., help="Key as section.key"),
    default: Optional[str] = typer.Option(
        None, "--default", "-d", help="Value to print if key is not defined."
    ),
    encoding: Optional[str] = typer.Option(
        None, "--encoding", "-e", help="Code page of ini-file (default: BOM or utf-8)."
    ),
    overrides: List[str] = typer.Option(
        [], "--set", help="Override section.key=value (repeatable, wins over ini-file)."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Print the value of one section.key, exit 1 if it is not defined."""
    ui = get_ui(verbose=verbose)
    cfg = resolve_config(ui, path, {"load": {"encoding": encoding}})
    if ui.verbose:
        print_config_sources(ui, cfg)

    entries = entries_or_exit(ui, path, cfg)
    opts = RunOptions.merge(
        {e.composite_key: e.value for e in entries},
        _overrides_or_exit(overrides),
        {key: default} if default is not None else None,
    )

    val, is_exist, is_default = opts.string_exist(key)
    if not is_exist and not is_default:
        if default is not None:
            typer.echo(default)
            return
        ui.err_console.print(f"[warn]not found: {escape(key)}[/warn]")
        raise typer.Exit(code=int(ExitCode.NOT_FOUND))

    typer.echo(val)
