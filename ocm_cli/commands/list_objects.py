"""
Print objects returned by the OCM API as a table.

Each object is a row, and each column is a path that is extracted from the object with the digger,
for example `api.url` or `region.id`.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ocm_cli import config
from ocm_cli.commands.items import read_items
from ocm_cli.errors import OcmError
from ocm_cli.output import Printer
from ocm_cli.output.table import DEFAULT_LEARNING_LIMIT, load_description

console = Console()
logger = logging.getLogger(__name__)


def default_columns(table: str) -> List[str]:
    """Return the names of the columns described for the table, in order."""
    return [data["name"] for data in load_description(table) if data and data.get("name")]


def write_table(
    printer: Printer,
    table: str,
    columns: List[str],
    items: List[Any],
    headers: bool = True,
    learning: bool = True,
    learning_limit: Optional[int] = DEFAULT_LEARNING_LIMIT,
) -> None:
    """Write the objects as rows of a table."""
    with printer.new_table(table, *columns, learning=learning, learning_limit=learning_limit) as output:
        if headers:
            output.write_headers()
        for item in items:
            output.write_row(item)


def list_command(
    table: str = typer.Argument(..., help="Table name, for example clusters, idps or ingresses"),
    input_file: Optional[Path] = typer.Argument(
        None, help="JSON or YAML document with the objects, the standard input if omitted"
    ),
    columns: Optional[str] = typer.Option(None, "--columns", "-c", help="Comma separated list of columns"),
    no_headers: bool = typer.Option(False, "--no-headers", help="Don't print the column headers"),
    learning: bool = typer.Option(
        True, "--learning/--no-learning", help="Adjust the widths of the columns to the printed values"
    ),
    learning_limit: int = typer.Option(
        DEFAULT_LEARNING_LIMIT,
        "--learning-limit",
        min=0,
        help="Number of rows used to learn the column widths, 0 for all",
    ),
    pager: Optional[str] = typer.Option(None, "--pager", help="Pager command, the configured one if omitted"),
) -> None:
    """
    Print a list of objects as a table.

    \b
    Examples:
        # Print the clusters using the default columns
        ocm list clusters clusters.json

        # Print selected columns of the identity providers read from stdin
        cat idps.json | ocm list idps -c name,type,mapping_method
    """
    try:
        column_specs = [columns] if columns else default_columns(table)
        if not column_specs:
            raise OcmError(f"no columns are described for table '{table}', use --columns")

        if pager is None:
            pager = config.load().pager

        items = read_items(input_file)

        with Printer(sys.stdout, pager=pager) as printer:
            write_table(
                printer,
                table,
                column_specs,
                items,
                headers=not no_headers,
                learning=learning,
                learning_limit=learning_limit,
            )
    except OcmError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except BrokenPipeError:
        logger.debug("Pager finished before all the rows were written")
