"""Shared types for the matchdb package."""

from typing import Any

Row = dict[str, Any]
Params = tuple | list | dict
ParamsList = list[tuple] | list[list]
CsvRow = list[str]
