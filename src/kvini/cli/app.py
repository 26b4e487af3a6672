from __future__ import annotations

import typer
from rich.console import Console

from kvini import __version__
from kvini.cli.commands.check import check_cmd
from kvini.cli.commands.parse import get_cmd, parse_cmd

app = typer.Typer(
    name="kvini",
    help="Parse ini-files into section.key = value options.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"kvini {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback
    ),
) -> None:
    pass


app.command("parse")(parse_cmd)
app.command("get")(get_cmd)
app.command("check")(check_cmd)
