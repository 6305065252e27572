"""
Commands that show and change the settings of the configuration file.
"""

import typer
from rich.console import Console
from rich.markup import escape

from ocm_cli import config
from ocm_cli.errors import OcmError
from ocm_cli.output.table import format_value

console = Console()

config_app = typer.Typer(
    name="config",
    help="Show and change the settings of the configuration file",
    no_args_is_help=True,
)


def config_get_command(
    name: str = typer.Argument(..., help="Setting name, for example url or pager"),
) -> None:
    """Print the value of a setting."""
    try:
        value = config.get_setting(config.load(), name)
    except OcmError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if isinstance(value, list):
        value = " ".join(value)
    typer.echo(format_value(value))


def config_set_command(
    name: str = typer.Argument(..., help="Setting name, for example url or pager"),
    value: str = typer.Argument(..., help="New value of the setting"),
) -> None:
    """
    Change the value of a setting.

    \b
    Example:
        # Show long output page by page
        ocm config set pager "less -R"
    """
    try:
        cfg = config.load()
        config.set_setting(cfg, name, value)
        config.save(cfg)
    except OcmError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def config_location_command() -> None:
    """Print the location of the configuration file."""
    typer.echo(str(config.location()))


config_app.command(name="get", help="Print the value of a setting")(config_get_command)
config_app.command(name="set", help="Change the value of a setting")(config_set_command)
config_app.command(name="location", help="Print the location of the configuration file")(config_location_command)
