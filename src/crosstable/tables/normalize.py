"""Project extracted records into the ``players`` and ``rounds`` relations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from crosstable.errors import Diagnostics, MalformedReportError, UnresolvedOpponentWarning
from crosstable.ingest.report import ExtractedRecord
from crosstable.models import PlayerRecord, RoundResult


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedTables:
    rounds_per_player: int
    players: List[PlayerRecord]
    rounds: List[RoundResult]


def _rating_change(pre_rating: int | None, post_rating: int | None) -> int | None:
    if pre_rating is None or post_rating is None:
        return None
    return post_rating - pre_rating


def _to_player(record: ExtractedRecord) -> PlayerRecord:
    rating = record.rating
    return PlayerRecord(
        pair_number=record.pair_number,
        state=record.state,
        name=record.name.title(),
        uscf_id=rating.uscf_id,
        pre_rating=rating.pre_rating,
        post_rating=rating.post_rating,
        total_points=record.total_points,
        rating_change=_rating_change(rating.pre_rating, rating.post_rating),
    )


def normalize_records(
    records: Sequence[ExtractedRecord],
    *,
    rounds_per_player: int,
    diagnostics: Diagnostics | None = None,
) -> NormalizedTables:
    """Build the roster and the long-format round log.

    Every player gets exactly ``rounds_per_player`` round rows in source
    column order. Opponents are kept only for games played over the board and
    only when the pair number exists in the roster.
    """

    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    players: List[PlayerRecord] = []
    seen: dict[int, int] = {}
    for record in records:
        if record.pair_number in seen:
            raise MalformedReportError(
                f"pair number {record.pair_number} already listed on line "
                f"{seen[record.pair_number]}",
                line_number=record.line_number,
            )
        seen[record.pair_number] = record.line_number
        players.append(_to_player(record))

    rounds: List[RoundResult] = []
    for record in records:
        if len(record.rounds) != rounds_per_player:
            raise MalformedReportError(
                f"expected {rounds_per_player} rounds, found {len(record.rounds)}",
                line_number=record.line_number,
            )
        for cell in record.rounds:
            opponent = cell.entry.opponent_number if cell.entry.result.is_played else None
            if opponent is not None and opponent not in seen:
                diagnostics.add(
                    UnresolvedOpponentWarning(
                        line_number=record.line_number,
                        message=(
                            f"player {record.pair_number} round {cell.round_number} "
                            f"references unknown pair number {opponent}"
                        ),
                        player_number=record.pair_number,
                        round_number=cell.round_number,
                        opponent_number=opponent,
                    )
                )
                opponent = None
            rounds.append(
                RoundResult(
                    round_id=len(rounds) + 1,
                    player_number=record.pair_number,
                    round_number=cell.round_number,
                    color=cell.color,
                    result=cell.entry.result,
                    opponent_number=opponent,
                )
            )

    logger.debug("Normalized %d players into %d round rows", len(players), len(rounds))
    return NormalizedTables(rounds_per_player=rounds_per_player, players=players, rounds=rounds)
