import pytest

from memorymatch.constants import (
    DIFFICULTY_PAIR_COUNTS,
    pair_count_for,
    parse_difficulty,
)
from memorymatch.exceptions import ConfigurationError, UnknownDifficultyError
from memorymatch.models import Difficulty


def test_difficulty_table():
    assert {d.value: n for d, n in DIFFICULTY_PAIR_COUNTS.items()} == {
        "easy": 4,
        "normal": 6,
        "hard": 8,
        "expert": 10,
    }


@pytest.mark.parametrize(
    "label, expected",
    [
        ("easy", 4),
        ("Normal", 6),
        (" hard ", 8),
        (Difficulty.Expert, 10),
    ],
)
def test_pair_count_for(label, expected):
    assert pair_count_for(label) == expected


def test_parse_difficulty_passes_enum_through():
    assert parse_difficulty(Difficulty.Easy) is Difficulty.Easy


@pytest.mark.parametrize("label", ["", "medium", "4"])
def test_unknown_difficulty(label):
    with pytest.raises(UnknownDifficultyError) as excinfo:
        pair_count_for(label)
    assert "Allowed: easy, normal, hard, expert" in str(excinfo.value)
    assert isinstance(excinfo.value, ConfigurationError)
    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value.original_exception, ValueError)
