"""Shared test fixtures."""

from pathlib import Path

import pytest

from matchdb import create_service
from matchdb.ingestion import create_repositories

TEAMS_HEADER = "ID,Name,ManagerFullName,Group"
PLAYERS_HEADER = "ID,TeamNumber,Position,FullName,TeamID"
MATCHES_HEADER = "ID,ATeamID,BTeamID,Date,Score"
RECORDS_HEADER = "ID,PlayerID,MatchID,fromMinutes,toMinutes"


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def repos(db_service):
    return create_repositories(db_service)


@pytest.fixture
def write_csv(tmp_path):
    """Write a source file: a header line followed by the given data lines."""

    def _write(name: str, header: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return path

    return _write
