"""Canonical player model produced by the table normalizer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerRecord(BaseModel):
    """One tournament participant, keyed by pair number."""

    pair_number: int = Field(..., ge=1)
    state: Optional[str] = None
    name: str
    uscf_id: Optional[str] = Field(default=None, pattern=r"^\d{8}$")
    pre_rating: Optional[int] = Field(default=None, ge=0)
    post_rating: Optional[int] = Field(default=None, ge=0)
    total_points: Optional[float] = Field(default=None, ge=0.0)
    rating_change: Optional[int] = None
    average_opponent_rating: Optional[float] = None

    model_config = ConfigDict(frozen=True)
