from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from crosstable.models import PlayerRecord, RoundResult


class DiagnosticResponse(BaseModel):
    kind: str
    line_number: int | None = None
    message: str
    field_name: str | None = None
    raw_value: str | None = None
    player_number: int | None = None
    round_number: int | None = None
    opponent_number: int | None = None


class PipelineReportResponse(BaseModel):
    total_players: int
    rounds_per_player: int
    total_rounds: int
    warnings: List[DiagnosticResponse] = Field(default_factory=list)


class CrosstableResponse(BaseModel):
    players: List[PlayerRecord]
    rounds: List[RoundResult]
    report: PipelineReportResponse


class TournamentSummaryResponse(BaseModel):
    tournament_id: str
    name: str
    created_at: datetime
    rounds_per_player: int
    total_players: int


class TournamentDetailResponse(CrosstableResponse):
    tournament_id: str
    name: str
    created_at: datetime
