"""
OCM CLI - Command line client for the OCM cluster management service.

Prints the objects returned by the service as tables, page by page if a pager is configured.
"""

import typer
from rich.console import Console

from ocm_cli import __description__, __version__
from ocm_cli.commands.config import config_app
from ocm_cli.commands.dig import dig_command
from ocm_cli.commands.dump import dump_command
from ocm_cli.commands.list_objects import list_command
from ocm_cli.log import configure_logging

console = Console()

# Create main Typer app
app = typer.Typer(
    name="ocm",
    help=__description__,
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"ocm version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
):
    """
    OCM CLI - Command line client for the OCM cluster management service.

    \b
    Common workflow:
        1. Save the objects returned by the API:
           curl -H "Authorization: Bearer $TOKEN" $URL/api/clusters_mgmt/v1/clusters > clusters.json

        2. Print them as a table:
           ocm list clusters clusters.json

        3. Choose the columns:
           ocm list clusters clusters.json --columns id,name,api.url,state

        4. Page long output:
           ocm config set pager less
    """
    configure_logging(debug)


# Register commands
app.command(name="list", help="Print a list of objects as a table")(list_command)
app.command(name="dig", help="Print the value of a path for each object")(dig_command)
app.command(name="dump", help="Print a JSON document indented")(dump_command)
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
