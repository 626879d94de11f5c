"""Multi-format calendar date parsing."""

from datetime import date, datetime
from typing import Sequence

from matchdb.config import DATE_FORMATS
from matchdb.ingestion.errors import FormatError


def parse_date(value: str, formats: Sequence[str] = DATE_FORMATS) -> date:
    """Parse ``value`` with the first matching format in ``formats``.

    Raises FormatError carrying the original string if no format matches.
    """
    text = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise FormatError(f"Unparseable date {value!r}", value=value)
