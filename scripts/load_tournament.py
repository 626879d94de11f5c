"""CLI entry point for loading the tournament CSV files.

Usage:
    python -m scripts.load_tournament --db-url sqlite:///matchdb.db \
        --teams data/teams.csv --players data/players.csv \
        --matches data/matches.csv --records data/records.csv [--date-format %d/%m/%Y ...]

Any option left out falls back to its MATCHDB_* environment variable, then to the default.
"""

import argparse
import logging
import sys
from dataclasses import replace

from matchdb import create_service
from matchdb.config import LoaderConfig
from matchdb.ingestion import create_repositories, run_pipeline

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> LoaderConfig:
    config = LoaderConfig.from_env()
    overrides = {
        "db_url": args.db_url,
        "teams_path": args.teams,
        "players_path": args.players,
        "matches_path": args.matches,
        "records_path": args.records,
        "date_formats": tuple(args.date_format) if args.date_format else None,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Load teams, players, matches and match records into the database"
    )
    parser.add_argument("--db-url", help="Database URL (sqlite:/// or postgresql://)")
    parser.add_argument("--teams", help="Teams CSV path or URL")
    parser.add_argument("--players", help="Players CSV path or URL")
    parser.add_argument("--matches", help="Matches CSV path or URL")
    parser.add_argument("--records", help="Match records CSV path or URL")
    parser.add_argument(
        "--date-format",
        action="append",
        help="strptime format for match dates; repeat to try several in order",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log dropped rows")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("matchdb").setLevel(logging.DEBUG)

    try:
        config = build_config(args)
        service = create_service(config.db_url, config.pool_size)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    service.connect()
    try:
        report = run_pipeline(create_repositories(service), config)
    finally:
        service.close()

    if not report.ok:
        logger.error("Load failed in the %s phase", report.failed_phase)
        sys.exit(1)
    logger.info("Done. %s", ", ".join(f"{n} {name}" for name, n in report.counts.items()))


if __name__ == "__main__":
    main()
