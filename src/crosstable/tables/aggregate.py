"""Opponent-strength statistics computed over the normalized tables."""

from __future__ import annotations

import statistics
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from crosstable.models import PlayerRecord, RoundResult


def average_opponent_rating(
    player_number: int,
    rounds: Iterable[RoundResult],
    pre_ratings: Mapping[int, Optional[int]],
) -> Optional[float]:
    """Mean pre-tournament rating of the resolvable opponents of one player.

    Rounds without an opponent, or whose opponent has no pre rating, are
    skipped. Returns None when nothing is left to average.
    """

    ratings = [
        pre_ratings[row.opponent_number]
        for row in rounds
        if row.player_number == player_number
        and row.opponent_number is not None
        and pre_ratings.get(row.opponent_number) is not None
    ]
    if not ratings:
        return None
    return statistics.fmean(ratings)


def attach_average_opponent_ratings(
    players: Sequence[PlayerRecord],
    rounds: Sequence[RoundResult],
) -> List[PlayerRecord]:
    pre_ratings: Dict[int, Optional[int]] = {
        player.pair_number: player.pre_rating for player in players
    }
    by_player: Dict[int, List[RoundResult]] = {}
    for row in rounds:
        by_player.setdefault(row.player_number, []).append(row)

    return [
        player.model_copy(
            update={
                "average_opponent_rating": average_opponent_rating(
                    player.pair_number,
                    by_player.get(player.pair_number, []),
                    pre_ratings,
                )
            }
        )
        for player in players
    ]
