"""Persistence for loaded entities: one bulk write and one read-back per entity type."""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, TypeVar

from matchdb.ingestion.models import Match, MatchRecord, Player, Team
from matchdb.ingestion.schema import (
    ID_CONFLICT_COLUMNS,
    MATCH_COLUMNS,
    MATCHES_TABLE,
    PLAYER_COLUMNS,
    PLAYERS_TABLE,
    RECORD_COLUMNS,
    RECORDS_TABLE,
    SCHEMA_DDL,
    TEAM_COLUMNS,
    TEAMS_TABLE,
)
from matchdb.service import DatabaseService
from matchdb.types import Row

logger = logging.getLogger(__name__)

E = TypeVar("E")


def ensure_schema(service: DatabaseService) -> None:
    """Create the four tables if they don't exist."""
    service.execute_ddl(SCHEMA_DDL)


def _to_date(value: Any) -> date:
    # SQLite hands back the ISO text we stored, psycopg2 a datetime.date
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


class Repository(ABC, Generic[E]):
    """Bulk upsert and read-back of one entity type.

    Rows are upserted on ``id``: when a source repeats an id, the last row wins.
    """

    table: str
    columns: list[str]

    def __init__(self, service: DatabaseService):
        self._service = service

    @abstractmethod
    def to_row(self, entity: E) -> tuple:
        """Return the column values for ``entity`` in ``columns`` order."""

    @abstractmethod
    def from_row(self, row: Row) -> E:
        """Rebuild an entity from a row returned by ``select_sql``."""

    def _fetch_rows(self) -> list[Row]:
        with self._service.transaction():
            return self._service.execute(self.select_sql())

    def select_sql(self) -> str:
        return f"SELECT {', '.join(self.columns)} FROM {self.table} ORDER BY id"

    def save_all(self, entities: Iterable[E]) -> int:
        """Persist every entity in one transaction and return how many were written."""
        rows = [self.to_row(e) for e in entities]
        duplicates = sorted(i for i, n in Counter(row[0] for row in rows).items() if n > 1)
        if duplicates:
            logger.warning(
                "Duplicate %s ids %s: the last row for each id wins", self.table, duplicates
            )
        with self._service.transaction():
            self._service.upsert(self.table, self.columns, rows, ID_CONFLICT_COLUMNS)
        return len(rows)

    def find_all(self) -> list[E]:
        return [self.from_row(row) for row in self._fetch_rows()]


class TeamRepository(Repository[Team]):
    table = TEAMS_TABLE
    columns = TEAM_COLUMNS

    def to_row(self, team: Team) -> tuple:
        return (team.id, team.name, team.manager_full_name, team.group)

    def from_row(self, row: Row) -> Team:
        return Team(row["id"], row["name"], row["manager_full_name"], row["team_group"])


class PlayerRepository(Repository[Player]):
    table = PLAYERS_TABLE
    columns = PLAYER_COLUMNS

    def select_sql(self) -> str:
        return (
            "SELECT p.id, p.squad_number, p.position, p.full_name, p.team_id, "
            "t.name AS team_name, t.manager_full_name, t.team_group "
            "FROM players p LEFT JOIN teams t ON t.id = p.team_id ORDER BY p.id"
        )

    def to_row(self, player: Player) -> tuple:
        team_id = player.team.id if player.team is not None else None
        return (player.id, player.squad_number, player.position, player.full_name, team_id)

    def from_row(self, row: Row) -> Player:
        team = None
        if row["team_id"] is not None:
            team = Team(
                row["team_id"], row["team_name"], row["manager_full_name"], row["team_group"]
            )
        return Player(row["id"], row["squad_number"], row["position"], row["full_name"], team)


class MatchRepository(Repository[Match]):
    table = MATCHES_TABLE
    columns = MATCH_COLUMNS

    def to_row(self, match: Match) -> tuple:
        return (match.id, match.team_a_id, match.team_b_id, match.date.isoformat(), match.score)

    def from_row(self, row: Row) -> Match:
        return Match(
            row["id"],
            row["team_a_id"],
            row["team_b_id"],
            _to_date(row["match_date"]),
            row["score"],
        )


class MatchRecordRepository(Repository[MatchRecord]):
    """Records are read back with their player and match resolved."""

    table = RECORDS_TABLE
    columns = RECORD_COLUMNS

    def __init__(
        self, service: DatabaseService, players: PlayerRepository, matches: MatchRepository
    ):
        super().__init__(service)
        self._players = players
        self._matches = matches

    def to_row(self, record: MatchRecord) -> tuple:
        return (
            record.id,
            record.player.id,
            record.match.id,
            record.from_minutes,
            record.to_minutes,
        )

    def from_row(
        self,
        row: Row,
        players_by_id: dict[int, Player] | None = None,
        matches_by_id: dict[int, Match] | None = None,
    ) -> MatchRecord:
        """Rebuild a record, reading players and matches back unless lookups are given."""
        if players_by_id is None:
            players_by_id = {p.id: p for p in self._players.find_all()}
        if matches_by_id is None:
            matches_by_id = {m.id: m for m in self._matches.find_all()}
        return MatchRecord(
            row["id"],
            players_by_id[row["player_id"]],
            matches_by_id[row["match_id"]],
            row["from_minutes"],
            row["to_minutes"],
        )

    def find_all(self) -> list[MatchRecord]:
        players_by_id = {p.id: p for p in self._players.find_all()}
        matches_by_id = {m.id: m for m in self._matches.find_all()}
        return [
            self.from_row(row, players_by_id, matches_by_id) for row in self._fetch_rows()
        ]


@dataclass
class Repositories:
    """The persistence collaborators for all four entity types."""

    teams: TeamRepository
    players: PlayerRepository
    matches: MatchRepository
    records: MatchRecordRepository


def create_repositories(service: DatabaseService) -> Repositories:
    """Ensure the schema exists and bind one repository per entity type to ``service``."""
    ensure_schema(service)
    players = PlayerRepository(service)
    matches = MatchRepository(service)
    return Repositories(
        teams=TeamRepository(service),
        players=players,
        matches=matches,
        records=MatchRecordRepository(service, players, matches),
    )
