import pytest

from core.exceptions import InvalidScoreValue
from services.score_validator import (
    is_valid_round_sum,
    validate_player_count,
    validate_player_name,
    validate_top_score,
)


@pytest.mark.parametrize("raw, expected", [
    ("007", 7),
    ("1500", 999),
    ("-2000", -999),
    ("", 0),
    ("   ", 0),
    (" 42 ", 42),
    ("+12", 12),
    ("-999", -999),
])
def test_validate_top_score(raw, expected):
    assert validate_top_score(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "12a", "1_000", "4.5", "--3", "- 3"])
def test_validate_top_score_rejects_non_numeric(raw):
    with pytest.raises(InvalidScoreValue) as exc_info:
        validate_top_score(raw)
    assert exc_info.value.raw_value == raw


def test_validate_player_name():
    assert validate_player_name("  Anna ") == "Anna"
    assert validate_player_name("   ") == ""


def test_validate_player_count_clamps():
    assert validate_player_count(2) == 3
    assert validate_player_count(9) == 6
    assert validate_player_count(5) == 5


def test_is_valid_round_sum():
    assert is_valid_round_sum([50, 50, 57], allow_match=True)
    assert not is_valid_round_sum([50, 50, 50], allow_match=True)
    assert is_valid_round_sum([-257, 0, 0], allow_match=True)


def test_is_valid_round_sum_ignores_missing_values():
    assert is_valid_round_sum([100, None, 57])
    assert not is_valid_round_sum([None, None, None])


def test_is_valid_round_sum_match_only_when_allowed():
    assert not is_valid_round_sum([-257, 0, 0], allow_match=False)
