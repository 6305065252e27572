"""
Exceptions raised by the OCM CLI library code.

Command functions catch ``OcmError`` and turn it into an error message and a non-zero exit code.
"""


class OcmError(Exception):
    """Base class for all the errors reported by the OCM CLI."""


class ConfigurationError(OcmError):
    """A mandatory parameter of a printer or table is missing or invalid."""


class ColumnCountError(OcmError):
    """The number of values given for a row doesn't match the number of columns of the table."""

    def __init__(self, table: str, columns: int, values: int):
        super().__init__(f"table '{table}' has {columns} columns, but {values} values have been given")
        self.table = table
        self.columns = columns
        self.values = values


class ConfigError(OcmError):
    """The configuration file can't be loaded, saved or updated."""


class InputError(OcmError):
    """The document with the objects to print can't be read or parsed."""
