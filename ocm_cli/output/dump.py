"""
Dumping of JSON documents.

Documents that are valid JSON are indented, or condensed to a single line. When the output is a
terminal and the `jq` tool is available it is used to print them, so that they are highlighted.
Anything else is written as it is.
"""

import json
import logging
import shutil
import subprocess
import sys
from typing import Any, List, Optional, TextIO, Union

from ocm_cli.output.printer import is_tty

logger = logging.getLogger(__name__)


def jq_command(stream: Any, condensed: bool = False) -> Optional[List[str]]:
    """Return the `jq` command line that prints to the stream, or None if it can't be used."""
    if not is_tty(stream):
        return None
    path = shutil.which("jq")
    if path is None:
        return None
    return [path, "-c", "."] if condensed else [path, "."]


def pretty(stream: TextIO, body: Union[str, bytes]) -> None:
    """Write the document indented, one field per line."""
    _dump(stream, body, condensed=False)


def simple(stream: TextIO, body: Union[str, bytes]) -> None:
    """Write the document condensed to a single line."""
    _dump(stream, body, condensed=True)


def dump_value(stream: TextIO, value: Any, condensed: bool = False) -> None:
    """Write a value parsed from a JSON or YAML document, for example a nested object."""
    _dump(stream, json.dumps(value, ensure_ascii=False, default=str), condensed=condensed)


def _dump(stream: TextIO, body: Union[str, bytes], condensed: bool) -> None:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not body:
        return

    try:
        data = json.loads(body)
    except ValueError:
        logger.debug("Document isn't valid JSON, it will be written as it is")
        stream.write(body + "\n")
        return

    command = jq_command(stream, condensed=condensed)
    if command is not None:
        stream.flush()
        subprocess.run(command, input=body, stdout=stream, stderr=sys.stderr, text=True, check=True)
        return

    if condensed:
        text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    else:
        text = json.dumps(data, ensure_ascii=False, indent=2)
    stream.write(text + "\n")
