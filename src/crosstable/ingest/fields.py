"""Pattern matchers that split compound crosstable fields into atomic values."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional

from crosstable.errors import Diagnostics
from crosstable.models import Color, Result


_ROUND_ENTRY_PATTERN = re.compile(r"^([A-Z])\s*(\d+)?", re.ASCII)
_USCF_ID_PATTERN = re.compile(r"(?<!\d)\d{8}(?!\d)", re.ASCII)
_PRE_RATING_PATTERN = re.compile(r"R:\s*(\d{1,5})(?!\d)", re.ASCII)
_POST_RATING_PATTERN = re.compile(r"->\s*(\d{3,4})(?!\d)", re.ASCII)

MAX_OPPONENT_DIGITS = 4

RESULT_CODES: dict[str, Result] = {
    "W": Result.WIN,
    "L": Result.LOSS,
    "D": Result.DRAW,
    "B": Result.BYE,
    "H": Result.HALF_POINT_BYE,
    "X": Result.FORFEIT,
    "F": Result.FORFEIT,
    "U": Result.UNPLAYED,
}

COLOR_CODES: dict[str, Color] = {
    "W": Color.WHITE,
    "B": Color.BLACK,
}


@dataclass(frozen=True)
class RoundEntry:
    result: Result
    opponent_number: Optional[int] = None


@dataclass(frozen=True)
class RatingInfo:
    uscf_id: Optional[str] = None
    pre_rating: Optional[int] = None
    post_rating: Optional[int] = None


def parse_round_entry(
    text: str,
    *,
    field_name: str = "result",
    diagnostics: Diagnostics | None = None,
    line_number: Optional[int] = None,
) -> RoundEntry:
    """Parse ``W  39`` style round cells; the opponent number is optional."""

    value = text.strip().upper()
    if not value:
        return RoundEntry(Result.UNPLAYED)
    match = _ROUND_ENTRY_PATTERN.match(value)
    code = match.group(1) if match else None
    if code not in RESULT_CODES:
        if diagnostics is not None:
            diagnostics.field_failed(
                field_name,
                text,
                f"unrecognized round result {text!r}",
                line_number=line_number,
            )
        return RoundEntry(Result.UNPLAYED)
    opponent = match.group(2)
    if opponent and len(opponent) > MAX_OPPONENT_DIGITS:
        if diagnostics is not None:
            diagnostics.field_failed(
                field_name,
                text,
                f"opponent number in {text!r} is too long",
                line_number=line_number,
            )
        opponent = None
    return RoundEntry(RESULT_CODES[code], int(opponent) if opponent else None)


def parse_rating_info(
    text: str,
    *,
    field_name: str = "rating",
    diagnostics: Diagnostics | None = None,
    line_number: Optional[int] = None,
) -> RatingInfo:
    """Parse ``15445895 / R: 1794 ->1817``.

    Entries without an 8-digit federation id are unrated guests and yield an
    empty ``RatingInfo``. Provisional ratings such as ``1641P17`` keep only the
    leading number.
    """

    id_match = _USCF_ID_PATTERN.search(text)
    if id_match is None:
        return RatingInfo()

    def extract(pattern: re.Pattern[str], label: str) -> Optional[int]:
        match = pattern.search(text, id_match.end())
        if match is None:
            if diagnostics is not None:
                diagnostics.field_failed(
                    field_name,
                    text,
                    f"no {label} rating in {text!r}",
                    line_number=line_number,
                )
            return None
        return int(match.group(1))

    return RatingInfo(
        uscf_id=id_match.group(0),
        pre_rating=extract(_PRE_RATING_PATTERN, "pre-tournament"),
        post_rating=extract(_POST_RATING_PATTERN, "post-tournament"),
    )


def parse_color(text: str) -> Color:
    return COLOR_CODES.get(text.strip().upper(), Color.UNASSIGNED)


def parse_total_points(
    text: str,
    *,
    field_name: str = "total",
    diagnostics: Diagnostics | None = None,
    line_number: Optional[int] = None,
    max_points: Optional[float] = None,
) -> Optional[float]:
    """Scores run from zero to ``max_points`` in half-point steps."""

    value = text.strip()
    try:
        points = float(value)
    except ValueError:
        points = None
    if (
        points is None
        or not math.isfinite(points)
        or points < 0
        or not (points * 2).is_integer()
        or (max_points is not None and points > max_points)
    ):
        if diagnostics is not None:
            diagnostics.field_failed(
                field_name,
                text,
                f"total points {text!r} is not a score",
                line_number=line_number,
            )
        return None
    return points


def parse_state(text: str) -> Optional[str]:
    value = text.strip().upper()
    return value or None
