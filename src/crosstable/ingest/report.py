"""Read a pipe-delimited crosstable report and emit merged player records."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel
from pydantic.config import ConfigDict

from crosstable.config import ReportLayout, get_layout
from crosstable.errors import Diagnostics, MalformedReportError, UnpairedRowError
from crosstable.ingest.fields import (
    RatingInfo,
    RoundEntry,
    parse_color,
    parse_rating_info,
    parse_round_entry,
    parse_state,
    parse_total_points,
)
from crosstable.models import Color


logger = logging.getLogger(__name__)

_SEPARATOR_PATTERN = re.compile(r"^-+$")
_PAIR_NUMBER_PATTERN = re.compile(r"^\d{1,6}$", re.ASCII)


class RawRow(BaseModel):
    """Trimmed fields of one physical content line."""

    line_number: int
    fields: Tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class MergedRecord(BaseModel):
    """Both rows of a player listing keyed by row-qualified field names."""

    line_numbers: Tuple[int, int]
    values: Dict[str, str]

    model_config = ConfigDict(frozen=True)

    def get(self, key: str) -> str:
        return self.values.get(key, "")


@dataclass(frozen=True)
class ReportLines:
    rounds: int
    rows: List[RawRow]


@dataclass(frozen=True)
class RoundCell:
    round_number: int
    entry: RoundEntry
    color: Color


@dataclass(frozen=True)
class ExtractedRecord:
    pair_number: int
    state: Optional[str]
    name: str
    rating: RatingInfo
    total_points: Optional[float]
    rounds: Tuple[RoundCell, ...]
    line_number: int


def _split_fields(line: str, delimiter: str) -> List[str]:
    parts = line.rstrip().split(delimiter)
    if len(parts) > 1 and line.rstrip().endswith(delimiter):
        parts = parts[:-1]
    return [part.strip() for part in parts]


def _is_header(fields: Sequence[str], layout: ReportLayout) -> bool:
    return bool(fields) and fields[0].lower() in layout.header_tokens


def _detect_rounds(lines: Sequence[str], layout: ReportLayout) -> int:
    for line in lines:
        fields = _split_fields(line, layout.delimiter)
        if not _is_header(fields, layout):
            continue
        count = sum(1 for value in fields if value.lower().startswith(layout.round_label))
        if count:
            return count
    logger.debug("No round header found; assuming %d rounds", layout.default_rounds)
    return layout.default_rounds


def read_report_lines(text: str, *, layout: ReportLayout | None = None) -> ReportLines:
    """Split report text into content rows, dropping separators and headers."""

    layout = layout or get_layout()
    lines = text.splitlines()
    rounds = _detect_rounds(lines, layout)
    expected = layout.field_count(rounds)

    rows: List[RawRow] = []
    for index, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or _SEPARATOR_PATTERN.match(stripped):
            continue
        fields = _split_fields(line, layout.delimiter)
        if _is_header(fields, layout):
            continue
        if len(fields) != expected:
            raise MalformedReportError(
                f"expected {expected} fields, found {len(fields)}",
                line_number=index,
            )
        rows.append(RawRow(line_number=index, fields=tuple(fields)))

    logger.debug("Read %d content rows across %d rounds", len(rows), rounds)
    return ReportLines(rounds=rounds, rows=rows)


def merge_row_pairs(
    rows: Sequence[RawRow],
    *,
    rounds: int,
    layout: ReportLayout | None = None,
) -> List[MergedRecord]:
    """Combine rows ``(2k, 2k+1)`` into one record per player."""

    layout = layout or get_layout()
    if len(rows) % 2:
        raise UnpairedRowError(
            f"{len(rows)} content rows cannot be paired",
            line_number=rows[-1].line_number,
        )

    columns = layout.columns(rounds)
    records: List[MergedRecord] = []
    for first, second in zip(rows[0::2], rows[1::2]):
        values: Dict[str, str] = {}
        for column, top, bottom in zip(columns, first.fields, second.fields):
            top_key, bottom_key = column.qualified()
            values[top_key] = top.strip()
            values[bottom_key] = bottom.strip()
        records.append(
            MergedRecord(line_numbers=(first.line_number, second.line_number), values=values)
        )
    return records


def _parse_pair_number(record: MergedRecord) -> int:
    raw = record.get("pair_1")
    if not _PAIR_NUMBER_PATTERN.match(raw) or int(raw) < 1:
        raise MalformedReportError(
            f"pair number {raw!r} is not a positive integer",
            line_number=record.line_numbers[0],
        )
    return int(raw)


def extract_record(
    record: MergedRecord,
    *,
    rounds: int,
    diagnostics: Diagnostics | None = None,
) -> ExtractedRecord:
    """Turn a merged record into typed values; bad fields degrade to None."""

    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    first_line, second_line = record.line_numbers

    cells = []
    for round_number in range(1, rounds + 1):
        result_key = f"result{round_number}_1"
        entry = parse_round_entry(
            record.get(result_key),
            field_name=result_key,
            diagnostics=diagnostics,
            line_number=first_line,
        )
        color = parse_color(record.get(f"color{round_number}_2"))
        cells.append(RoundCell(round_number=round_number, entry=entry, color=color))

    return ExtractedRecord(
        pair_number=_parse_pair_number(record),
        state=parse_state(record.get("state_2")),
        name=record.get("name_1"),
        rating=parse_rating_info(
            record.get("rating_2"),
            field_name="rating_2",
            diagnostics=diagnostics,
            line_number=second_line,
        ),
        total_points=parse_total_points(
            record.get("total_1"),
            field_name="total_1",
            diagnostics=diagnostics,
            line_number=first_line,
            max_points=rounds,
        ),
        rounds=tuple(cells),
        line_number=first_line,
    )


def load_report_records(
    text: str,
    *,
    layout: ReportLayout | None = None,
    diagnostics: Diagnostics | None = None,
) -> Tuple[int, List[ExtractedRecord]]:
    """Run the reader, merger, and extractor stages over ``text``."""

    layout = layout or get_layout()
    lines = read_report_lines(text, layout=layout)
    if not lines.rows:
        raise MalformedReportError("report has no player rows")
    merged = merge_row_pairs(lines.rows, rounds=lines.rounds, layout=layout)
    records = [
        extract_record(record, rounds=lines.rounds, diagnostics=diagnostics)
        for record in merged
    ]
    return lines.rounds, records
