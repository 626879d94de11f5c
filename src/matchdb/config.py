"""Loader configuration from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping

ENV_PREFIX = "MATCHDB_"

# Tried in order by the date parser; the first format that parses wins.
DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%d.%m.%Y",
)


@dataclass
class LoaderConfig:
    """Where to read the four sources from and where to load them to.

    Source locations are filesystem paths or http(s) URLs.
    """

    db_url: str = "sqlite:///matchdb.db"
    teams_path: str = "data/teams.csv"
    players_path: str = "data/players.csv"
    matches_path: str = "data/matches.csv"
    records_path: str = "data/records.csv"
    date_formats: tuple[str, ...] = DATE_FORMATS
    pool_size: int = 4

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoaderConfig":
        """Build a config from ``MATCHDB_*`` variables, falling back to the defaults.

        MATCHDB_DATE_FORMATS is a ``;``-separated list of strptime formats.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str, default: str) -> str:
            return env.get(ENV_PREFIX + name) or default

        formats = env.get(ENV_PREFIX + "DATE_FORMATS")
        pool_size = get("POOL_SIZE", str(defaults.pool_size))
        try:
            pool_size_value = int(pool_size)
        except ValueError:
            raise ValueError(
                f"{ENV_PREFIX}POOL_SIZE must be an integer, got {pool_size!r}"
            ) from None

        return cls(
            db_url=get("DB_URL", defaults.db_url),
            teams_path=get("TEAMS_CSV", defaults.teams_path),
            players_path=get("PLAYERS_CSV", defaults.players_path),
            matches_path=get("MATCHES_CSV", defaults.matches_path),
            records_path=get("RECORDS_CSV", defaults.records_path),
            date_formats=parse_date_formats(formats) if formats else defaults.date_formats,
            pool_size=pool_size_value,
        )


def parse_date_formats(value: str) -> tuple[str, ...]:
    """Split a ``;``-separated format list, dropping empty entries."""
    formats = tuple(fmt.strip() for fmt in value.split(";") if fmt.strip())
    if not formats:
        raise ValueError("At least one date format is required")
    return formats
