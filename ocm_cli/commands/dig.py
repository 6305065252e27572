"""
Print the value of a path extracted from each object of a document.
"""

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ocm_cli.commands.items import read_items
from ocm_cli.data import Digger
from ocm_cli.errors import OcmError
from ocm_cli.output.dump import dump_value
from ocm_cli.output.table import format_value

console = Console()


def dig_command(
    path: str = typer.Argument(..., help="Dot separated path, for example api.url"),
    input_file: Optional[Path] = typer.Argument(
        None, help="JSON or YAML document with the objects, the standard input if omitted"
    ),
) -> None:
    """
    Print the value of a path for each object, one per line.

    Values that don't exist are printed as NONE, and nested objects and lists as single line JSON.

    \b
    Example:
        ocm dig region.id clusters.json
    """
    try:
        items = read_items(input_file)
    except OcmError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    digger = Digger()
    for item in items:
        value = digger.dig(item, path)
        if isinstance(value, (Mapping, list)):
            dump_value(sys.stdout, value, condensed=True)
        else:
            sys.stdout.write(format_value(value) + "\n")
