"""Relational projections of extracted crosstable records."""

from .aggregate import attach_average_opponent_ratings, average_opponent_rating
from .normalize import NormalizedTables, normalize_records

__all__ = [
    "NormalizedTables",
    "attach_average_opponent_ratings",
    "average_opponent_rating",
    "normalize_records",
]
