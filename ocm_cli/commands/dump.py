"""
Print a JSON document returned by the OCM API so that it is easy to read.
"""

import subprocess
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ocm_cli.commands.items import read_document
from ocm_cli.errors import OcmError
from ocm_cli.output import dump

console = Console()


def dump_command(
    input_file: Optional[Path] = typer.Argument(None, help="JSON document, the standard input if omitted"),
    single: bool = typer.Option(False, "--single", help="Print the document in a single line"),
) -> None:
    """
    Print a JSON document indented, highlighted with jq when writing to a terminal.

    Text that isn't valid JSON is printed as it is.

    \b
    Examples:
        ocm dump cluster.json
        curl ... | ocm dump --single
    """
    try:
        body = read_document(input_file)
        if single:
            dump.simple(sys.stdout, body)
        else:
            dump.pretty(sys.stdout, body)
    except OcmError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Error: jq failed with exit code {e.returncode}[/red]")
        raise typer.Exit(1)
