from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from kvini.parsers.errors import IniParseError
from kvini.parsers.types import IniEntry


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


# ----------------------------
# Key/value tables
# ----------------------------

@dataclass(frozen=True)
class MappingRenderOptions:
    title: Optional[str] = None
    sort_keys: bool = True


def render_mapping_table(
    console: Console,
    kv: Mapping[str, str],
    *,
    opts: Optional[MappingRenderOptions] = None,
) -> None:
    opts = opts or MappingRenderOptions()

    if not kv:
        console.print("[muted]No keys.[/muted]")
        return

    items = sorted(kv.items()) if opts.sort_keys else list(kv.items())
    table = Table(title=opts.title or f"Keys ({len(items)})", show_lines=False)
    table.add_column("Section", style="bold", no_wrap=True)
    table.add_column("Key", style="key", no_wrap=True)
    table.add_column("Value")

    for composite, val in items:
        section, _, key = composite.partition(".")
        # Text() keeps [brackets] in values away from rich markup
        table.add_row(Text(section), Text(key), Text(_short(val, 120)))

    console.print(table)


# ----------------------------
# Errors
# ----------------------------

def render_parse_error(console: Console, path: Path, err: IniParseError) -> None:
    console.print(
        Text.assemble(
            ("✗ ", "error"),
            (str(path), "path"),
            (f":{err.line}: ", "muted"),
            (err.reason, "warn"),
        )
    )


def render_error(console: Console, err: Exception, *, verbose: bool = False) -> None:
    console.print(Text.assemble(("✗ ", "error"), (str(err), "warn")))
    if verbose and err.__cause__ is not None:
        console.print(Text(f"  caused by: {_short(str(err.__cause__), 160)}", style="muted"))


# ----------------------------
# Check summary
# ----------------------------

def render_check_result(
    console: Console,
    path: Path,
    entries: Sequence[IniEntry],
    *,
    verbose: bool = False,
) -> None:
    keys = {e.composite_key for e in entries}
    sections = {e.section for e in entries}
    console.print(
        f"[ok]OK[/ok] [path]{escape(str(path))}[/path]: "
        f"{len(keys)} key(s) in {len(sections)} section(s)"
    )

    overwritten = len(entries) - len(keys)
    if overwritten:
        console.print(f"[warn]⚠️  {overwritten} duplicate key(s), last value wins.[/warn]")

    if verbose:
        seen = set()
        for e in reversed(entries):
            if e.composite_key in seen:
                console.print(f"[muted]  line {e.line}: {escape(e.composite_key)} overwritten[/muted]")
            seen.add(e.composite_key)
