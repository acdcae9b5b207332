import pytest

from crosstable import run_pipeline
from crosstable.errors import FieldExtractionWarning, MalformedReportError
from crosstable.models import Result


def test_pipeline_row_counts_and_integrity(sample_report: str):
    result = run_pipeline(sample_report)
    pair_numbers = {player.pair_number for player in result.players}

    assert result.report.rounds_per_player == 3
    assert len(result.rounds) == len(result.players) * result.report.rounds_per_player
    assert result.report.total_rounds == len(result.rounds)
    assert all(
        row.opponent_number is None or row.opponent_number in pair_numbers
        for row in result.rounds
    )
    assert result.report.warnings == []


def test_pipeline_rating_change_matches_ratings(sample_report: str):
    result = run_pipeline(sample_report)
    for player in result.players:
        if player.pre_rating is not None and player.post_rating is not None:
            assert player.rating_change == player.post_rating - player.pre_rating
        else:
            assert player.rating_change is None


def test_pipeline_attaches_averages(sample_report: str):
    result = run_pipeline(sample_report)
    gary = result.players[0]
    assert gary.average_opponent_rating == pytest.approx(1468.5)


def test_pipeline_is_idempotent(sample_report: str):
    first = run_pipeline(sample_report)
    second = run_pipeline(sample_report)
    assert first.players == second.players
    assert first.rounds == second.rounds
    assert [row.model_dump() for row in first.rounds] == [row.model_dump() for row in second.rounds]


def test_pipeline_bye_excluded_from_average(sample_report: str):
    result = run_pipeline(sample_report)
    aditya_rounds = [row for row in result.rounds if row.player_number == 3]
    assert aditya_rounds[0].result is Result.BYE
    assert aditya_rounds[0].opponent_number is None
    assert result.players[2].average_opponent_rating == pytest.approx(1794)


def test_pipeline_collects_recoverable_warnings(sample_report: str):
    text = sample_report.replace("|W   2|D   3|W   4|", "|W   2|Q   3|W  40|")
    result = run_pipeline(text)

    assert len(result.report.field_warnings) == 1
    assert isinstance(result.report.field_warnings[0], FieldExtractionWarning)
    assert len(result.report.unresolved_opponents) == 1
    assert len(result.players) == 4
    payload = result.report.as_dict()
    assert [item["kind"] for item in payload["warnings"]] == [
        "FieldExtractionWarning",
        "UnresolvedOpponentWarning",
    ]


def test_pipeline_fatal_errors_propagate(sample_report: str):
    with pytest.raises(MalformedReportError):
        run_pipeline(sample_report.replace("|L   1|W   4|H    |", "|L   1|W   4|"))


def test_pipeline_unknown_layout():
    with pytest.raises(KeyError):
        run_pipeline("", layout="FIDE")


def test_pipeline_tolerates_one_sided_pairings(sample_report: str):
    text = sample_report.replace("|W   2|D   3|W   4|", "|W   4|D   3|W   4|").replace(
        "/ R: UNR   ->", "15000000 / R: 1400   ->1390"
    )
    result = run_pipeline(text)

    gary_rounds = [row for row in result.rounds if row.player_number == 1]
    patrick_rounds = [row for row in result.rounds if row.player_number == 4]
    assert len(gary_rounds) == len(patrick_rounds) == 3
    assert gary_rounds[0].opponent_number == 4
    assert patrick_rounds[0].result is Result.UNPLAYED
    assert patrick_rounds[0].opponent_number is None
    assert result.players[0].average_opponent_rating == pytest.approx((1400 + 1384 + 1400) / 3)
    assert result.report.warnings == []
