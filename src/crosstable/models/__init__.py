"""Canonical tournament models shared across ingestion and table layers."""

from .player import PlayerRecord
from .round import Color, Result, RoundResult

__all__ = ["Color", "PlayerRecord", "Result", "RoundResult"]
