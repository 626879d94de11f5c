"""CSV ingestion: teams, players, matches and match records."""

from matchdb.ingestion.csv_reader import read_csv
from matchdb.ingestion.dates import DATE_FORMATS, parse_date
from matchdb.ingestion.errors import FormatError, LoaderError, PhaseOrderError, ResourceReadError
from matchdb.ingestion.pipeline import PHASES, LoadReport, Phase, run_pipeline
from matchdb.ingestion.repository import Repositories, create_repositories

__all__ = [
    "DATE_FORMATS",
    "PHASES",
    "FormatError",
    "LoadReport",
    "LoaderError",
    "Phase",
    "PhaseOrderError",
    "Repositories",
    "ResourceReadError",
    "create_repositories",
    "parse_date",
    "read_csv",
    "run_pipeline",
]
