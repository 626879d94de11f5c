"""Tests for entity persistence and read-back."""

from datetime import date

import pytest

from matchdb.ingestion.models import Match, MatchRecord, Player, Team
from matchdb.ingestion.repository import Repository

GERMANY = Team(1, "Germany", "Julian Nagelsmann", "A")
MUSIALA = Player(10, 10, "MF", "Jamal Musiala", GERMANY)
OPENER = Match(100, 1, 2, date(2024, 6, 14), "5-1")


class TestRepository:
    def test_base_is_abstract(self, db_service):
        with pytest.raises(TypeError):
            Repository(db_service)

    def test_incomplete_subclass_rejected(self, db_service):
        class TeamsWithoutReadBack(Repository[Team]):
            table = "teams"
            columns = ["id"]

            def to_row(self, team):
                return (team.id,)

        with pytest.raises(TypeError, match="from_row"):
            TeamsWithoutReadBack(db_service)

    def test_save_all_returns_count(self, repos):
        assert repos.teams.save_all([GERMANY]) == 1
        assert repos.teams.save_all([]) == 0

    def test_player_without_team_round_trips(self, repos):
        repos.players.save_all([Player(20, 1, "GK", "Angus Gunn")])
        assert repos.players.find_all() == [Player(20, 1, "GK", "Angus Gunn", None)]


class TestMatchRecordRepository:
    @pytest.fixture
    def stored(self, repos):
        repos.teams.save_all([GERMANY])
        repos.players.save_all([MUSIALA])
        repos.matches.save_all([OPENER])
        repos.records.save_all([MatchRecord(1000, MUSIALA, OPENER, 0, 90)])
        return repos

    def test_find_all_resolves_references(self, stored):
        assert stored.records.find_all() == [MatchRecord(1000, MUSIALA, OPENER, 0, 90)]

    def test_from_row_reads_back_references(self, stored):
        row = {"id": 1000, "player_id": 10, "match_id": 100, "from_minutes": 0, "to_minutes": 74}
        assert stored.records.from_row(row) == MatchRecord(1000, MUSIALA, OPENER, 0, 74)

    def test_from_row_uses_given_lookups(self, stored):
        other = Match(100, 3, 4, date(2024, 6, 15), "1-3")
        row = {"id": 1000, "player_id": 10, "match_id": 100, "from_minutes": 0, "to_minutes": 90}
        record = stored.records.from_row(row, {10: MUSIALA}, {100: other})
        assert record.match == other
