"""End-to-end crosstable pipeline: text in, normalized tables out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

from crosstable.config import ReportLayout, get_layout
from crosstable.errors import (
    Diagnostics,
    FieldExtractionWarning,
    PipelineWarning,
    UnresolvedOpponentWarning,
)
from crosstable.ingest import load_report_records
from crosstable.models import PlayerRecord, RoundResult
from crosstable.tables import attach_average_opponent_ratings, normalize_records


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineReport:
    total_players: int
    rounds_per_player: int
    total_rounds: int
    warnings: List[PipelineWarning] = field(default_factory=list)

    @property
    def field_warnings(self) -> List[PipelineWarning]:
        return [w for w in self.warnings if isinstance(w, FieldExtractionWarning)]

    @property
    def unresolved_opponents(self) -> List[PipelineWarning]:
        return [w for w in self.warnings if isinstance(w, UnresolvedOpponentWarning)]

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_players": self.total_players,
            "rounds_per_player": self.rounds_per_player,
            "total_rounds": self.total_rounds,
            "warnings": [warning.as_dict() for warning in self.warnings],
        }


@dataclass(frozen=True)
class CrosstableResult:
    players: List[PlayerRecord]
    rounds: List[RoundResult]
    report: PipelineReport


def run_pipeline(text: str, *, layout: ReportLayout | str | None = None) -> CrosstableResult:
    """Parse a crosstable report and compute opponent averages.

    Structural problems raise ``CrosstableError`` subclasses and nothing is
    returned. Field-level problems are collected on ``result.report``.
    """

    if layout is None or isinstance(layout, str):
        layout = get_layout(layout) if layout else get_layout()
    diagnostics = Diagnostics()

    rounds_per_player, records = load_report_records(text, layout=layout, diagnostics=diagnostics)
    tables = normalize_records(
        records,
        rounds_per_player=rounds_per_player,
        diagnostics=diagnostics,
    )
    players = attach_average_opponent_ratings(tables.players, tables.rounds)

    report = PipelineReport(
        total_players=len(players),
        rounds_per_player=rounds_per_player,
        total_rounds=len(tables.rounds),
        warnings=list(diagnostics.warnings),
    )
    logger.info(
        "Parsed %d players over %d rounds with %d warnings",
        report.total_players,
        report.rounds_per_player,
        len(report.warnings),
    )
    return CrosstableResult(players=players, rounds=tables.rounds, report=report)


def run_pipeline_from_path(path: Path, *, layout: ReportLayout | str | None = None) -> CrosstableResult:
    return run_pipeline(path.read_text(encoding="utf-8"), layout=layout)
