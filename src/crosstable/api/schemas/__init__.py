"""Pydantic models for API I/O."""

from .tables import (
    CrosstableResponse,
    DiagnosticResponse,
    PipelineReportResponse,
    TournamentDetailResponse,
    TournamentSummaryResponse,
)

__all__ = [
    "CrosstableResponse",
    "DiagnosticResponse",
    "PipelineReportResponse",
    "TournamentDetailResponse",
    "TournamentSummaryResponse",
]
