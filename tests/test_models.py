import pytest
from pydantic import ValidationError

from crosstable.models import Color, PlayerRecord, Result, RoundResult


def test_player_record_is_frozen():
    record = PlayerRecord(pair_number=1, name="Gary Hua", uscf_id="15445895", pre_rating=1794)

    assert record.pair_number == 1
    assert record.average_opponent_rating is None

    with pytest.raises((TypeError, ValidationError)):
        record.name = "Someone Else"  # type: ignore[misc]


def test_player_record_rejects_short_uscf_id():
    with pytest.raises(ValidationError):
        PlayerRecord(pair_number=1, name="Gary Hua", uscf_id="1544")


def test_round_result_defaults_to_unplayed():
    row = RoundResult(round_id=1, player_number=1, round_number=1)
    assert row.result is Result.UNPLAYED
    assert row.color is Color.UNASSIGNED
    assert row.opponent_number is None


def test_result_is_played():
    assert Result.DRAW.is_played
    assert not Result.HALF_POINT_BYE.is_played
    assert not Result.FORFEIT.is_played
