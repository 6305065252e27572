"""
Tabular output.

Columns are identified by names that are also the paths used to extract their values from the row
objects. The header and the width of the columns of a table can be described in a YAML document
bundled with the package as ``tables/<table>.yaml``:

    columns:
    - name: id
      width: 32
    - name: api.url
      header: API URL

Columns that aren't described get a header derived from the name, and a width equal to the length
of the name.
"""

import enum
import importlib.resources
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import yaml

from ocm_cli.data import Digger
from ocm_cli.data.digger import returns_pair
from ocm_cli.errors import ColumnCountError, ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_LEARNING_LIMIT = 100
NONE_TEXT = "NONE"
GUTTER = "  "
LIST_TYPES = (list, tuple, set, frozenset)

# Marks columns without an explicit value, those are extracted with the digger:
UNSET = object()


def split_column_specs(specs: Iterable[str]) -> List[str]:
    """Split comma separated column specifications into individual column names."""
    names = []
    for spec in specs:
        for chunk in spec.split(","):
            name = chunk.strip()
            if name:
                names.append(name)
    return names


def default_header(name: str) -> str:
    """Calculate the header of a column from its name, for example `api.url` gives `API URL`."""
    return name.replace(".", " ").replace("_", " ").upper()


def format_value(value: Any) -> str:
    """
    Convert a column value into the text that will be written. Lists are written as their items
    separated by commas, and mappings as `key=value` pairs, for example the labels of a machine pool.
    """
    if value is None:
        return NONE_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, Mapping):
        return ", ".join(f"{key}={format_value(item)}" for key, item in value.items())
    if isinstance(value, LIST_TYPES) and not hasattr(value, "_fields"):
        return ", ".join(format_value(item) for item in value)
    return str(value)


def render_row(texts: Sequence[str], widths: Sequence[int]) -> str:
    """Truncate or pad each text to the width of its column and join them in one line."""
    fields = []
    for text, width in zip(texts, widths):
        if len(text) > width:
            fields.append(text[:width])
        else:
            fields.append(text.ljust(width))
    return GUTTER.join(fields) + "\n"


def load_description(table: str) -> List[Dict[str, Any]]:
    """Load the column descriptions bundled for the given table, if any."""
    resource = importlib.resources.files("ocm_cli.output").joinpath(f"tables/{table}.yaml")
    if not resource.is_file():
        return []
    try:
        data = yaml.safe_load(resource.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"description of table '{table}' isn't valid: {e}") from e
    logger.debug("Loaded description of table '%s'", table)
    return data.get("columns") or []


class Column:
    """Name, header, width and value source of a column of a table."""

    def __init__(self, name: str, header: Optional[str] = None, width: Optional[int] = None, value: Any = UNSET):
        self.name = name
        self.header = header if header is not None else default_header(name)
        self.width = width if width is not None else len(name)
        self.value = value

    def value_of(self, obj: Any, digger: Digger) -> Any:
        """
        Extract the value of this column from the row object. Columns without an explicit value use
        the digger. Explicit values that are callable are called with the row object, others are
        used as they are.
        """
        if self.value is UNSET:
            return digger.dig(obj, self.name)
        if not callable(self.value):
            return self.value
        result = self.value(obj)
        if returns_pair(self.value):
            result, present = result
            return result if present else None
        return result

    def learn(self, text: str) -> None:
        """Widen the column if needed to fit the text. Columns never get narrower."""
        if len(text) > self.width:
            self.width = len(text)


class Table:
    """
    Writes rows of fixed width columns to a printer.

    While learning, rows are kept in memory and the columns are widened to fit them. Once the
    learning limit is reached, or when the table is closed, the kept rows are written and the
    widths don't change anymore.
    """

    def __init__(
        self,
        printer: Any,
        name: str,
        columns: Union[str, Iterable[str]],
        values: Optional[Mapping[str, Any]] = None,
        digger: Optional[Digger] = None,
        learning: bool = True,
        learning_limit: Optional[int] = DEFAULT_LEARNING_LIMIT,
    ):
        if printer is None:
            raise ConfigurationError("printer is mandatory")
        if not name:
            raise ConfigurationError("name is mandatory")
        if isinstance(columns, str):
            columns = [columns]
        column_names = split_column_specs(columns)
        if not column_names:
            raise ConfigurationError("at least one column is required")
        if learning_limit is not None and learning_limit < 0:
            raise ConfigurationError(f"learning limit should be zero or positive, but it is {learning_limit}")

        self.name = name
        self._printer = printer
        self._digger = digger if digger is not None else printer.digger
        self._learning = learning
        self._learning_limit = learning_limit
        self._pending: List[List[str]] = []
        self.columns = self._load_columns(column_names, values or {})

    def _load_columns(self, column_names: List[str], values: Mapping[str, Any]) -> List[Column]:
        described = {}
        for i, data in enumerate(load_description(self.name)):
            column_name = (data or {}).get("name")
            if not column_name:
                raise ConfigurationError(f"column {i} of table '{self.name}' doesn't have a name")
            described[column_name] = data

        columns = []
        for column_name in column_names:
            data = described.get(column_name, {})
            columns.append(
                Column(
                    column_name,
                    header=data.get("header"),
                    width=data.get("width"),
                    value=values.get(column_name, UNSET),
                )
            )
        return columns

    @property
    def learning(self) -> bool:
        """True while the widths of the columns are still being learned."""
        return self._learning

    @property
    def widths(self) -> List[int]:
        return [column.width for column in self.columns]

    def write_columns(self, values: Sequence[Any]) -> None:
        """Write a row using the given values, one per column."""
        if len(values) != len(self.columns):
            raise ColumnCountError(self.name, len(self.columns), len(values))
        texts = [format_value(value) for value in values]

        if not self._learning:
            self._printer.write(render_row(texts, self.widths))
            return

        for column, text in zip(self.columns, texts):
            column.learn(text)
        self._pending.append(texts)
        if self._learning_limit and len(self._pending) >= self._learning_limit:
            self._stop_learning()

    def write_headers(self) -> None:
        """Write the headers of the columns."""
        self.write_columns([column.header for column in self.columns])

    def write_row(self, obj: Any) -> None:
        """Write a row extracting the values of the columns from the given object."""
        self.write_columns([column.value_of(obj, self._digger) for column in self.columns])

    write_object = write_row

    def _stop_learning(self) -> None:
        if not self._learning:
            return
        logger.debug("Widths of table '%s' frozen at %s", self.name, self.widths)
        self._learning = False
        pending, self._pending = self._pending, []
        widths = self.widths
        for texts in pending:
            self._printer.write(render_row(texts, widths))

    def close(self) -> None:
        """Write the rows that are still pending."""
        self._stop_learning()

    def __enter__(self) -> "Table":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
