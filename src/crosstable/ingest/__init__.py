"""Input adapters that turn raw crosstable text into typed player records."""

from .fields import (
    RatingInfo,
    RoundEntry,
    parse_color,
    parse_rating_info,
    parse_round_entry,
    parse_total_points,
)
from .report import (
    ExtractedRecord,
    MergedRecord,
    RawRow,
    ReportLines,
    RoundCell,
    extract_record,
    load_report_records,
    merge_row_pairs,
    read_report_lines,
)

__all__ = [
    "ExtractedRecord",
    "MergedRecord",
    "RatingInfo",
    "RawRow",
    "ReportLines",
    "RoundCell",
    "RoundEntry",
    "extract_record",
    "load_report_records",
    "merge_row_pairs",
    "parse_color",
    "parse_rating_info",
    "parse_round_entry",
    "parse_total_points",
    "read_report_lines",
]
