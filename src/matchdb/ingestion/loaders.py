"""Row parsers and the per-entity loaders.

Each loader reads its source, builds every entity in memory, then persists the
whole set with a single ``save_all`` call. Loaders that resolve references
first read back the entities persisted by an earlier phase and index them by id.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence, TypeVar

from matchdb.ingestion.csv_reader import read_csv
from matchdb.ingestion.dates import DATE_FORMATS, parse_date
from matchdb.ingestion.errors import FormatError
from matchdb.ingestion.models import (
    DEFAULT_TO_MINUTES,
    Match,
    MatchRecord,
    Player,
    Skip,
    Team,
)
from matchdb.ingestion.repository import Repositories
from matchdb.types import CsvRow

logger = logging.getLogger(__name__)

NULL_SENTINEL = "NULL"

T = TypeVar("T")
E = TypeVar("E")

# Column ranges: ids are BIGINT, squad numbers and minutes INTEGER
BIGINT_BOUNDS = (-(2**63), 2**63 - 1)
INTEGER_BOUNDS = (-(2**31), 2**31 - 1)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _field(row: CsvRow, index: int, name: str) -> str:
    try:
        return row[index].strip()
    except IndexError:
        raise FormatError(f"Missing {name} (column {index + 1})") from None


def _to_int(value: str, name: str, bounds: tuple[int, int] = BIGINT_BOUNDS) -> int:
    if not _INTEGER.fullmatch(value):
        raise FormatError(f"Invalid integer for {name}: {value!r}", value=value)
    number = int(value)
    low, high = bounds
    if not low <= number <= high:
        raise FormatError(f"{name} out of range: {value!r}", value=value)
    return number


def _int_field(
    row: CsvRow, index: int, name: str, bounds: tuple[int, int] = BIGINT_BOUNDS
) -> int:
    return _to_int(_field(row, index, name), name, bounds)


def build_lookup(entities: Iterable[E]) -> dict[int, E]:
    """Index entities by their ``id``."""
    return {entity.id: entity for entity in entities}


def _parse_rows(rows: list[CsvRow], source: str, parse: Callable[[CsvRow], T]) -> Iterator[T]:
    # line 1 of every source is the header
    for line, row in enumerate(rows, start=2):
        try:
            yield parse(row)
        except FormatError as e:
            raise e.at(source, line) from e


def parse_team(row: CsvRow) -> Team:
    return Team(
        id=_int_field(row, 0, "team id"),
        name=_field(row, 1, "name"),
        manager_full_name=_field(row, 2, "manager full name"),
        group=_field(row, 3, "group"),
    )


def parse_player(row: CsvRow, teams_by_id: dict[int, Team]) -> Player:
    """Build a Player, leaving ``team`` unset when its team id is unknown."""
    return Player(
        id=_int_field(row, 0, "player id"),
        squad_number=_int_field(row, 1, "squad number", INTEGER_BOUNDS),
        position=_field(row, 2, "position"),
        full_name=_field(row, 3, "full name"),
        team=teams_by_id.get(_int_field(row, 4, "team id")),
    )


def parse_match(row: CsvRow, date_formats: Sequence[str] = DATE_FORMATS) -> Match:
    return Match(
        id=_int_field(row, 0, "match id"),
        team_a_id=_int_field(row, 1, "team A id"),
        team_b_id=_int_field(row, 2, "team B id"),
        date=parse_date(_field(row, 3, "date"), date_formats),
        score=_field(row, 4, "score"),
    )


def parse_to_minutes(value: str) -> int:
    """Parse the to-minute field, mapping the NULL sentinel to a full match."""
    value = value.strip()
    if value.upper() == NULL_SENTINEL:
        return DEFAULT_TO_MINUTES
    return _to_int(value, "to minutes", INTEGER_BOUNDS)


def parse_record(
    row: CsvRow,
    players_by_id: dict[int, Player],
    matches_by_id: dict[int, Match],
) -> MatchRecord | Skip:
    """Build a MatchRecord, or a Skip when its player or match is not loaded.

    Minutes are only parsed once both references resolve.
    """
    record_id = _int_field(row, 0, "record id")
    player_id = _int_field(row, 1, "player id")
    match_id = _int_field(row, 2, "match id")

    player = players_by_id.get(player_id)
    match = matches_by_id.get(match_id)
    if player is None or match is None:
        missing = []
        if player is None:
            missing.append(f"player {player_id}")
        if match is None:
            missing.append(f"match {match_id}")
        return Skip(f"record {record_id}: unknown {' and '.join(missing)}")

    return MatchRecord(
        id=record_id,
        player=player,
        match=match,
        from_minutes=_int_field(row, 3, "from minutes", INTEGER_BOUNDS),
        to_minutes=parse_to_minutes(_field(row, 4, "to minutes")),
    )


def load_teams(repositories: Repositories, source: str | Path) -> int:
    rows = read_csv(source)
    teams = list(_parse_rows(rows, str(source), parse_team))
    return repositories.teams.save_all(teams)


def load_players(repositories: Repositories, source: str | Path) -> int:
    """Load players; requires teams to be persisted already."""
    rows = read_csv(source)
    teams_by_id = build_lookup(repositories.teams.find_all())
    players = list(
        _parse_rows(rows, str(source), lambda row: parse_player(row, teams_by_id))
    )
    unattached = sum(1 for p in players if p.team is None)
    if unattached:
        logger.debug("%d players reference a team that was not loaded", unattached)
    return repositories.players.save_all(players)


def load_matches(
    repositories: Repositories,
    source: str | Path,
    date_formats: Sequence[str] = DATE_FORMATS,
) -> int:
    rows = read_csv(source)
    matches = list(_parse_rows(rows, str(source), lambda row: parse_match(row, date_formats)))
    return repositories.matches.save_all(matches)


def load_records(repositories: Repositories, source: str | Path) -> int:
    """Load match records; requires players and matches to be persisted already.

    Rows whose player or match does not resolve are dropped, not treated as errors.
    """
    rows = read_csv(source)
    players_by_id = build_lookup(repositories.players.find_all())
    matches_by_id = build_lookup(repositories.matches.find_all())

    records: list[MatchRecord] = []
    skipped: list[Skip] = []
    outcomes = _parse_rows(
        rows, str(source), lambda row: parse_record(row, players_by_id, matches_by_id)
    )
    for outcome in outcomes:
        if isinstance(outcome, Skip):
            skipped.append(outcome)
        else:
            records.append(outcome)

    if skipped:
        logger.debug(
            "Dropped %d of %d record rows: %s",
            len(skipped),
            len(rows),
            "; ".join(s.reason for s in skipped),
        )
    return repositories.records.save_all(records)
