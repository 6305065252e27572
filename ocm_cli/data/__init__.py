"""Extraction of data from arbitrary objects using paths."""

from ocm_cli.data.digger import Digger, method_name_matches, name_matches

__all__ = ["Digger", "method_name_matches", "name_matches"]
