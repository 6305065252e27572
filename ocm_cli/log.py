"""
Logging setup for the OCM CLI.

Diagnostics go to the standard error stream so that they never mix with tabular output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr using rich, at debug level if requested."""
    level = logging.DEBUG if debug else logging.WARNING
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
