"""Printers and tables used to write the output of commands."""

from ocm_cli.output.printer import Printer
from ocm_cli.output.table import Column, Table

__all__ = ["Column", "Printer", "Table"]
