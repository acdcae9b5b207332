"""CSV export helpers for the normalized tables."""

from __future__ import annotations

import csv
from enum import Enum
from io import StringIO
from typing import Any, Iterable, Sequence

from crosstable.models import PlayerRecord, RoundResult


class TableExportError(RuntimeError):
    """Raised when a requested export column does not exist."""


PLAYER_COLUMNS: tuple[str, ...] = (
    "pair_number",
    "state",
    "name",
    "uscf_id",
    "pre_rating",
    "post_rating",
    "total_points",
    "rating_change",
    "average_opponent_rating",
)

ROUND_COLUMNS: tuple[str, ...] = (
    "round_id",
    "player_number",
    "round_number",
    "color",
    "result",
    "opponent_number",
)

SUMMARY_HEADERS: tuple[str, ...] = (
    "Player Name",
    "State",
    "Total Points",
    "Pre-Rating",
    "Average Opponent Rating",
)


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    return value


def _resolve_columns(requested: Sequence[str] | None, available: Sequence[str]) -> tuple[str, ...]:
    if not requested:
        return tuple(available)
    unknown = [column for column in requested if column not in available]
    if unknown:
        raise TableExportError(f"Unknown export columns: {', '.join(unknown)}")
    return tuple(requested)


def _write(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([_cell(value) for value in row])
    return buffer.getvalue()


def players_to_csv(players: Sequence[PlayerRecord], *, columns: Sequence[str] | None = None) -> str:
    selected = _resolve_columns(columns, PLAYER_COLUMNS)
    return _write(selected, ([getattr(player, name) for name in selected] for player in players))


def rounds_to_csv(rounds: Sequence[RoundResult], *, columns: Sequence[str] | None = None) -> str:
    selected = _resolve_columns(columns, ROUND_COLUMNS)
    return _write(selected, ([getattr(row, name) for name in selected] for row in rounds))


def summary_to_csv(players: Sequence[PlayerRecord]) -> str:
    """Final report table; averages are rounded to whole rating points."""

    rows = []
    for player in players:
        average = player.average_opponent_rating
        rows.append(
            [
                player.name,
                player.state,
                player.total_points,
                player.pre_rating,
                None if average is None else round(average),
            ]
        )
    return _write(SUMMARY_HEADERS, rows)


__all__ = [
    "PLAYER_COLUMNS",
    "ROUND_COLUMNS",
    "SUMMARY_HEADERS",
    "TableExportError",
    "players_to_csv",
    "rounds_to_csv",
    "summary_to_csv",
]
