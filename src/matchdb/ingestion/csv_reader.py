"""Header-skipping reader for the unquoted comma-separated source files."""

import logging
from pathlib import Path

import requests

from matchdb.ingestion.errors import ResourceReadError
from matchdb.types import CsvRow

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 10


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def _fetch_lines(url: str) -> list[str]:
    try:
        resp = requests.get(url, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise ResourceReadError(url, e) from e
    return resp.text.splitlines()


def _read_lines(path: str | Path) -> list[str]:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceReadError(str(path), e) from e


def split_lines(lines: list[str]) -> list[CsvRow]:
    """Drop the header line and split every remaining line on commas.

    Blank lines at the end of the resource are ignored; a blank line between
    data lines is kept as a row. There is no quoting support: a comma inside
    a field always starts a new field.
    """
    data = lines[1:]
    while data and not data[-1].strip():
        data.pop()
    return [line.split(",") for line in data]


def read_csv(location: str | Path) -> list[CsvRow]:
    """Read all data rows from a local file or an http(s) URL.

    The whole resource is drained and released before returning.
    Raises ResourceReadError if it cannot be opened or read.
    """
    location_str = str(location)
    if _is_url(location_str):
        lines = _fetch_lines(location_str)
    else:
        lines = _read_lines(location)
    rows = split_lines(lines)
    logger.debug("Read %d data rows from %s", len(rows), location_str)
    return rows
