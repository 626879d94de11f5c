"""Runs the four load phases in dependency order."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from matchdb.config import LoaderConfig
from matchdb.ingestion.errors import LoaderError, PhaseOrderError
from matchdb.ingestion.loaders import load_matches, load_players, load_records, load_teams
from matchdb.ingestion.repository import Repositories

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Phase:
    """One load step and the phases whose results it reads back."""

    name: str
    run: Callable[[Repositories, LoaderConfig], int]
    requires: tuple[str, ...] = ()


PHASES: tuple[Phase, ...] = (
    Phase("teams", lambda repos, cfg: load_teams(repos, cfg.teams_path)),
    Phase("players", lambda repos, cfg: load_players(repos, cfg.players_path), ("teams",)),
    Phase(
        "matches",
        lambda repos, cfg: load_matches(repos, cfg.matches_path, cfg.date_formats),
    ),
    Phase(
        "records",
        lambda repos, cfg: load_records(repos, cfg.records_path),
        ("players", "matches"),
    ),
)


@dataclass
class LoadReport:
    counts: dict[str, int] = field(default_factory=dict)
    failed_phase: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed_phase is None


def validate_phase_order(phases: Sequence[Phase]) -> None:
    """Raise PhaseOrderError unless every phase runs after all the phases it requires."""
    seen: set[str] = set()
    for phase in phases:
        if phase.name in seen:
            raise PhaseOrderError(f"Phase {phase.name!r} is scheduled twice")
        missing = [name for name in phase.requires if name not in seen]
        if missing:
            raise PhaseOrderError(
                f"Phase {phase.name!r} must run after {', '.join(missing)}"
            )
        seen.add(phase.name)


def run_pipeline(
    repositories: Repositories,
    config: LoaderConfig,
    phases: Sequence[Phase] = PHASES,
) -> LoadReport:
    """Run each phase to completion before starting the next.

    A read or format failure stops the run at the failing phase. Phases that
    already finished stay persisted. The failure is logged and recorded in the
    returned report rather than raised.
    """
    validate_phase_order(phases)

    report = LoadReport()
    for phase in phases:
        try:
            count = phase.run(repositories, config)
        except LoaderError as e:
            logger.error("Loading aborted during %s phase: %s", phase.name, e)
            report.failed_phase = phase.name
            return report
        report.counts[phase.name] = count
        logger.info("Loaded %d %s", count, phase.name)

    logger.info("All %d phases loaded", len(phases))
    return report
