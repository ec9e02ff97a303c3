import pytest

from app.db.schema import EcoLetter
from app.utils.eco_display import format_eco_score, letter_color


@pytest.mark.parametrize("score,expected", [
    (95, "95/100"),
    (72.86, "72/100"),
    (0, "0/100"),
    (None, "N/A"),
])
def test_format_eco_score(score, expected):
    assert format_eco_score(score) == expected


@pytest.mark.parametrize("letter,color", [
    (EcoLetter.A, "green"),
    (EcoLetter.B, "lime"),
    ("C", "amber"),
    (EcoLetter.D, "orange"),
    (EcoLetter.E, "red"),
    (None, None),
])
def test_letter_color(letter, color):
    assert letter_color(letter) == color
