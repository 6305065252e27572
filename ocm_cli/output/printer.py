"""
Output printer.

The printer writes text to an output stream. When a pager is configured, the pager executable is
available and the output is a terminal, the text goes through a pager process instead.
"""

import logging
import shutil
import subprocess
import threading
from typing import Any, List, Mapping, Optional, TextIO

from ocm_cli.data import Digger
from ocm_cli.errors import ConfigurationError
from ocm_cli.output.table import DEFAULT_LEARNING_LIMIT, Table

logger = logging.getLogger(__name__)


def pager_command(pager: str) -> Optional[List[str]]:
    """
    Translate the pager setting into a command line, starting with the full path of the
    executable. Returns None if the setting is empty or the executable isn't available.
    """
    chunks = (pager or "").split()
    if not chunks:
        return None
    path = shutil.which(chunks[0])
    if path is None:
        logger.debug("Pager '%s' not found, output will not be paged", chunks[0])
        return None
    return [path] + chunks[1:]


def is_tty(writer: Any) -> bool:
    """Check if the writer is connected to a terminal."""
    isatty = getattr(writer, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed file.
        return False


class Printer:
    """Writes output text, page by page if a pager is in use."""

    def __init__(self, writer: Optional[TextIO], pager: str = "", digger: Optional[Digger] = None):
        if writer is None:
            raise ConfigurationError("writer is mandatory")

        self.digger = digger if digger is not None else Digger()
        self._writer = writer
        self._pager_process: Optional[subprocess.Popen] = None
        self._pager_stopped: Optional[threading.Event] = None
        self._closed = False

        command = pager_command(pager)
        if command is not None and is_tty(writer):
            self._start_pager(command)

    def _start_pager(self, command: List[str]) -> None:
        logger.debug("Sending output to pager %s", command)
        self._writer.flush()
        self._pager_process = subprocess.Popen(command, stdin=subprocess.PIPE, stdout=self._writer, text=True)

        # The user may quit the pager at any time, even before we finish writing, with `q` or
        # with Ctrl-C. Its exit is observed by a separate thread, and writes after that fail
        # with a broken pipe.
        self._pager_stopped = threading.Event()
        watcher = threading.Thread(target=self._watch_pager, name="pager-watcher", daemon=True)
        watcher.start()

    def _watch_pager(self) -> None:
        self._pager_process.wait()
        self._pager_stopped.set()

    @property
    def paging(self) -> bool:
        """True if the output is going through a pager."""
        return self._pager_process is not None

    def write(self, text: str) -> int:
        if self._pager_process is not None:
            return self._pager_process.stdin.write(text)
        return self._writer.write(text)

    def flush(self) -> None:
        if self._pager_process is not None:
            self._pager_process.stdin.flush()
        else:
            self._writer.flush()

    def new_table(
        self,
        name: str,
        *columns: str,
        values: Optional[Mapping[str, Any]] = None,
        digger: Optional[Digger] = None,
        learning: bool = True,
        learning_limit: Optional[int] = DEFAULT_LEARNING_LIMIT,
    ) -> Table:
        """
        Create a table that writes to this printer. Each column spec can be a single column name or
        several comma separated names.
        """
        return Table(
            self,
            name,
            columns,
            values=values,
            digger=digger,
            learning=learning,
            learning_limit=learning_limit,
        )

    def close(self) -> None:
        """
        Release the resources used by the printer. If a pager is running, this closes the pipe
        and waits till the pager finishes, so that no zombie process is left around.
        """
        if self._closed:
            return
        self._closed = True
        if self._pager_process is None:
            self._writer.flush()
            return
        try:
            self._pager_process.stdin.close()
        except BrokenPipeError:
            # The pager was closed before reading everything.
            pass
        self._pager_stopped.wait()

    def __enter__(self) -> "Printer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
