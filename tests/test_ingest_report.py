import pytest

from crosstable.errors import Diagnostics, MalformedReportError, UnpairedRowError
from crosstable.ingest import (
    RawRow,
    extract_record,
    load_report_records,
    merge_row_pairs,
    read_report_lines,
)
from crosstable.models import Color, Result


GARY_HUA_REPORT = """\
-----------------------------------------------------------------
 Pair | Player Name            |Total|Round|Round|Round|Round|Round|Round|Round|
 Num  | USCF ID / Rtg (Pre->Post)|Pts |  1  |  2  |  3  |  4  |  5  |  6  |  7  |
-----------------------------------------------------------------
    1 | GARY HUA               |6.0  |W  39|W  21|W  18|W  14|W   7|D  12|D   4|
   ON | 15445895 / R: 1794 ->1817|N:2 |W    |W    |W    |W    |W    |B    |W    |
-----------------------------------------------------------------
"""


def test_read_report_lines_skips_separators_and_headers(sample_report: str):
    lines = read_report_lines(sample_report)
    assert lines.rounds == 3
    assert len(lines.rows) == 8
    assert lines.rows[0].fields[:3] == ("1", "GARY HUA", "2.5")
    assert lines.rows[1].fields[0] == "ON"
    assert lines.rows[0].line_number == 5


def test_read_report_lines_drops_repeated_headers(sample_report: str):
    header = "\n".join(sample_report.splitlines()[1:3])
    repeated = sample_report + header + "\n"
    assert len(read_report_lines(repeated).rows) == 8


def test_read_report_lines_uses_default_rounds_without_header():
    text = (
        "    1 | A PLAYER |1.0  |W   2|L   2|U    |U    |U    |U    |U    |\n"
        "   ON | 12345678 / R: 1500 ->1510 |N:2 |W    |B    |     |     |     |     |     |\n"
    )
    lines = read_report_lines(text)
    assert lines.rounds == 7
    assert len(lines.rows) == 2


def test_read_report_lines_rejects_wrong_field_count(sample_report: str):
    broken = sample_report.replace("|W   2|D   3|W   4|", "|W   2|D   3|")
    with pytest.raises(MalformedReportError) as excinfo:
        read_report_lines(broken)
    assert excinfo.value.line_number == 5


def test_merge_row_pairs_qualifies_field_names(sample_report: str):
    lines = read_report_lines(sample_report)
    merged = merge_row_pairs(lines.rows, rounds=lines.rounds)
    assert len(merged) == 4
    first = merged[0]
    assert first.line_numbers == (5, 6)
    assert first.get("pair_1") == "1"
    assert first.get("state_2") == "ON"
    assert first.get("name_1") == "GARY HUA"
    assert first.get("rating_2") == "15445895 / R: 1794   ->1817"
    assert first.get("result1_1") == "W   2"
    assert first.get("color2_2") == "B"


def test_merge_row_pairs_requires_even_rows():
    rows = [RawRow(line_number=1, fields=("1", "A", "1.0", "W   2"))]
    with pytest.raises(UnpairedRowError):
        merge_row_pairs(rows, rounds=1)


def test_unpaired_report_fails_before_extraction(sample_report: str):
    truncated = "\n".join(sample_report.splitlines()[:-2])
    with pytest.raises(UnpairedRowError):
        load_report_records(truncated)


def test_extract_record_opening_wins_as_white():
    lines = read_report_lines(GARY_HUA_REPORT)
    [merged] = merge_row_pairs(lines.rows, rounds=lines.rounds)
    record = extract_record(merged, rounds=lines.rounds)

    assert record.pair_number == 1
    assert record.name == "GARY HUA"
    assert record.state == "ON"
    assert record.total_points == pytest.approx(6.0)
    assert [cell.entry.result for cell in record.rounds[:5]] == [Result.WIN] * 5
    assert [cell.entry.opponent_number for cell in record.rounds[:5]] == [39, 21, 18, 14, 7]
    assert [cell.color for cell in record.rounds[:5]] == [Color.WHITE] * 5
    assert [cell.round_number for cell in record.rounds] == [1, 2, 3, 4, 5, 6, 7]
    assert record.rating.uscf_id == "15445895"
    assert record.rating.pre_rating == 1794
    assert record.rating.post_rating == 1817


def test_extract_record_degrades_bad_fields(sample_report: str):
    broken = sample_report.replace("|2.5  |W   2|D   3|", "|??   |Q   2|D   3|")
    diagnostics = Diagnostics()
    _, records = load_report_records(broken, diagnostics=diagnostics)

    gary = records[0]
    assert gary.total_points is None
    assert gary.rounds[0].entry.result is Result.UNPLAYED
    assert gary.rounds[1].entry.result is Result.DRAW
    assert {warning.field_name for warning in diagnostics.warnings} == {"total_1", "result1_1"}


def test_extract_record_rejects_non_numeric_pair(sample_report: str):
    broken = sample_report.replace("    3 | ADITYA", "   3a | ADITYA")
    with pytest.raises(MalformedReportError):
        load_report_records(broken)


def test_empty_report_is_malformed():
    with pytest.raises(MalformedReportError):
        load_report_records("-----\n Pair | Player Name |Total|Round|\n-----\n")


@pytest.mark.parametrize("pair", ["²", "١", "9" * 5000])
def test_extract_record_rejects_unconvertible_pair(sample_report: str, pair: str):
    broken = sample_report.replace("    3 | ADITYA", f"    {pair} | ADITYA")
    with pytest.raises(MalformedReportError):
        load_report_records(broken)


def test_extract_record_checks_total_against_round_count(sample_report: str):
    broken = sample_report.replace("|2.5  |W   2|D   3|", "|9.3  |W   2|D   3|")
    diagnostics = Diagnostics()
    _, records = load_report_records(broken, diagnostics=diagnostics)

    assert records[0].total_points is None
    assert [warning.field_name for warning in diagnostics.warnings] == ["total_1"]


def test_oversized_opponent_keeps_the_record(sample_report: str):
    broken = sample_report.replace("|W   2|D   3|W   4|", "|W   2|D   3|W " + "9" * 5000 + "|")
    diagnostics = Diagnostics()
    _, records = load_report_records(broken, diagnostics=diagnostics)

    assert records[0].rounds[2].entry.result is Result.WIN
    assert records[0].rounds[2].entry.opponent_number is None
    assert [warning.field_name for warning in diagnostics.warnings] == ["result3_1"]
