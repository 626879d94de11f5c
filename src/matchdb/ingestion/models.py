"""Entities built from the source rows."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

DEFAULT_TO_MINUTES = 90


@dataclass(frozen=True)
class Team:
    id: int
    name: str
    manager_full_name: str
    group: str


@dataclass(frozen=True)
class Player:
    id: int
    squad_number: int
    position: str
    full_name: str
    team: Optional[Team] = None  # None when the source team id is unknown


@dataclass(frozen=True)
class Match:
    id: int
    team_a_id: int
    team_b_id: int
    date: date
    score: str


@dataclass(frozen=True)
class MatchRecord:
    id: int
    player: Player
    match: Match
    from_minutes: int
    to_minutes: int = DEFAULT_TO_MINUTES


@dataclass(frozen=True)
class Skip:
    """Outcome of a source row that is dropped without failing the run."""

    reason: str
