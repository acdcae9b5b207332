"""REST API for parsing and storing crosstable reports."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from crosstable.api.schemas import (
    CrosstableResponse,
    PipelineReportResponse,
    TournamentDetailResponse,
    TournamentSummaryResponse,
)
from crosstable.errors import CrosstableError
from crosstable.export import summary_to_csv
from crosstable.persistence import TournamentStore
from crosstable.pipeline import CrosstableResult, run_pipeline


logger = logging.getLogger(__name__)


async def _read_report(upload: UploadFile) -> str:
    contents = await upload.read()
    if not contents:
        raise HTTPException(status_code=400, detail="report file is empty")
    try:
        return contents.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"report is not UTF-8 text: {exc}") from exc


def _parse(text: str, layout: str) -> CrosstableResult:
    try:
        return run_pipeline(text, layout=layout)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0])) from exc
    except CrosstableError as exc:
        logger.info("Rejected report: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _to_response(result: CrosstableResult) -> CrosstableResponse:
    return CrosstableResponse(
        players=result.players,
        rounds=result.rounds,
        report=PipelineReportResponse.model_validate(result.report.as_dict()),
    )


def create_app(store: TournamentStore | None = None) -> FastAPI:
    app = FastAPI(title="crosstable")
    store = store or TournamentStore(Path(__file__).resolve().parent.parent / "crosstable.sqlite")
    app.state.tournament_store = store

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/parse", response_model=CrosstableResponse)
    async def parse(
        report: UploadFile = File(...),
        layout: str = Form("USCF"),
    ) -> CrosstableResponse:
        text = await _read_report(report)
        return _to_response(_parse(text, layout))

    @app.post("/tournaments", response_model=TournamentSummaryResponse)
    async def create_tournament(
        report: UploadFile = File(...),
        name: str | None = Form(None),
        layout: str = Form("USCF"),
    ) -> TournamentSummaryResponse:
        text = await _read_report(report)
        result = _parse(text, layout)
        summary = store.save_tournament(result, name=name or report.filename or "tournament")
        return TournamentSummaryResponse(**asdict(summary))

    @app.get("/tournaments", response_model=list[TournamentSummaryResponse])
    async def list_tournaments(limit: int = 50) -> list[TournamentSummaryResponse]:
        return [TournamentSummaryResponse(**asdict(item)) for item in store.list_tournaments(limit=limit)]

    @app.get("/tournaments/{tournament_id}", response_model=TournamentDetailResponse)
    async def get_tournament(tournament_id: str) -> TournamentDetailResponse:
        record = store.get_tournament(tournament_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Tournament not found")
        return TournamentDetailResponse(
            tournament_id=record.tournament_id,
            name=record.name,
            created_at=record.created_at,
            players=record.players,
            rounds=record.rounds,
            report=PipelineReportResponse.model_validate(record.report),
        )

    @app.get("/tournaments/{tournament_id}/summary.csv")
    async def export_summary(tournament_id: str) -> Response:
        record = store.get_tournament(tournament_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Tournament not found")
        return Response(
            content=summary_to_csv(record.players),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{tournament_id}-summary.csv"'},
        )

    return app


__all__ = ["create_app"]
