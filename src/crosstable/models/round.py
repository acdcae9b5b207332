"""Long-format round results, one row per player per round."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Color(str, Enum):
    WHITE = "White"
    BLACK = "Black"
    UNASSIGNED = "Unassigned"


class Result(str, Enum):
    WIN = "Win"
    LOSS = "Loss"
    DRAW = "Draw"
    BYE = "Bye"
    HALF_POINT_BYE = "HalfPointBye"
    FORFEIT = "Forfeit"
    UNPLAYED = "Unplayed"

    @property
    def is_played(self) -> bool:
        """True for results decided over the board against an opponent."""

        return self in {Result.WIN, Result.LOSS, Result.DRAW}


class RoundResult(BaseModel):
    round_id: int = Field(..., ge=1)
    player_number: int = Field(..., ge=1)
    round_number: int = Field(..., ge=1)
    color: Color = Color.UNASSIGNED
    result: Result = Result.UNPLAYED
    opponent_number: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True)
