"""Tests for the load_tournament CLI."""

import logging
from pathlib import Path

import pytest

from matchdb import create_service
from scripts.load_tournament import main

DATA_DIR = Path(__file__).parent.parent / "data"


def _source_args(data_dir: Path) -> list[str]:
    return [
        "--teams", str(data_dir / "teams.csv"),
        "--players", str(data_dir / "players.csv"),
        "--matches", str(data_dir / "matches.csv"),
        "--records", str(data_dir / "records.csv"),
    ]


@pytest.fixture
def matchdb_logger():
    """The package logger, with its level restored after the test."""
    logger = logging.getLogger("matchdb")
    level = logger.level
    yield logger
    logger.setLevel(level)


def _count(db_path: Path, table: str) -> int:
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    try:
        with service.transaction():
            return service.execute(f"SELECT COUNT(*) AS cnt FROM {table}")[0]["cnt"]
    finally:
        service.close()


class TestCli:
    def test_loads_sample_data(self, tmp_path, monkeypatch):
        monkeypatch.delenv("MATCHDB_DB_URL", raising=False)
        db_path = tmp_path / "cli.db"
        main(["--db-url", f"sqlite:///{db_path}", *_source_args(DATA_DIR)])

        assert _count(db_path, "teams") == 4
        assert _count(db_path, "players") == 7
        assert _count(db_path, "matches") == 3
        assert _count(db_path, "match_records") == 8

    def test_env_provides_sources(self, tmp_path, monkeypatch):
        db_path = tmp_path / "env.db"
        monkeypatch.setenv("MATCHDB_DB_URL", f"sqlite:///{db_path}")
        for name in ("teams", "players", "matches", "records"):
            monkeypatch.setenv(f"MATCHDB_{name.upper()}_CSV", str(DATA_DIR / f"{name}.csv"))
        main([])
        assert _count(db_path, "match_records") == 8

    def test_verbose_logs_dropped_rows(self, tmp_path, caplog, matchdb_logger):
        db_url = f"sqlite:///{tmp_path / 'verbose.db'}"
        main(["--db-url", db_url, "-v", *_source_args(DATA_DIR)])
        assert matchdb_logger.level == logging.DEBUG
        assert "Dropped 1 of 9 record rows" in caplog.text
        assert "unknown player 999" in caplog.text

    def test_dropped_rows_quiet_by_default(self, tmp_path, caplog, matchdb_logger):
        main(["--db-url", f"sqlite:///{tmp_path / 'quiet.db'}", *_source_args(DATA_DIR)])
        assert "Dropped" not in caplog.text

    def test_failed_phase_exits_nonzero(self, tmp_path):
        args = _source_args(DATA_DIR)
        args[args.index("--matches") + 1] = str(tmp_path / "missing.csv")
        with pytest.raises(SystemExit) as exc_info:
            main(["--db-url", f"sqlite:///{tmp_path / 'fail.db'}", *args])
        assert exc_info.value.code == 1

    def test_date_format_override(self, tmp_path):
        # only ISO dates accepted, so the sample matches file fails
        with pytest.raises(SystemExit):
            main(
                [
                    "--db-url", f"sqlite:///{tmp_path / 'fmt.db'}",
                    *_source_args(DATA_DIR),
                    "--date-format", "%Y-%m-%d",
                ]
            )

    def test_bad_db_url_exits_nonzero(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--db-url", "mysql://localhost/db"])
        assert exc_info.value.code == 1
