"""
Reading of the objects that commands print.

Objects come from a JSON or YAML document, usually the output of the OCM API. List responses
like `{"kind": "ClusterList", "items": [...]}` give one object per item.
"""

import sys
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ocm_cli.errors import InputError


def parse_items(text: str) -> List[Any]:
    """Parse a JSON or YAML document and return the objects it contains."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InputError(f"failed to parse input document: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return data["items"]
    if isinstance(data, list):
        return data
    return [data]


def read_document(input_file: Optional[Path]) -> str:
    """Read the text of the given file, or of the standard input if no file is given."""
    if input_file is None or str(input_file) == "-":
        return sys.stdin.read()

    if not input_file.exists():
        raise InputError(f"input file not found: {input_file}")
    try:
        with open(input_file, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise InputError(f"can't read input file '{input_file}': {e}") from e


def read_items(input_file: Optional[Path]) -> List[Any]:
    """Read the objects from the given file, or from the standard input if no file is given."""
    return parse_items(read_document(input_file))
