import pytest
from sympy import Rational

from game.answers import parse_answer_text, parse_number
from game.errors import MalformedInput


@pytest.mark.parametrize("raw", ["5", "0", "42", "100", "-5", "-42", "  42  ", "2147483647"])
def test_parse_answer_text_valid(raw):
    assert parse_answer_text(raw) == int(raw.strip())


@pytest.mark.parametrize(
    "raw",
    ["2, 9", "2, 9 ", "2,9", "2 9", "5.5", "5,5", "5.", ".5", "5a", "a5", "5@", "", "   ", None],
)
def test_parse_answer_text_rejects(raw):
    with pytest.raises(MalformedInput):
        parse_answer_text(raw)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("5", "5"),
        ("-5", "-5"),
        ("5.5", "5.5"),
        ("-5.5", "-5.5"),
        (".5", "0.5"),
        ("-.5", "-0.5"),
        ("5,5", "5.5"),
        ("-5,5", "-5.5"),
        ("3,9", "3.9"),
        ("  42.5  ", "42.5"),
    ],
)
def test_parse_number_valid(raw, expected):
    assert parse_number(raw) == Rational(expected)


@pytest.mark.parametrize("raw", ["2, 9", "5.5.5", "5,5,5", "5a", "a5", "5@", "", "   "])
def test_parse_number_rejects(raw):
    with pytest.raises(MalformedInput):
        parse_number(raw)


@pytest.mark.parametrize("raw", ["5\u200b", "5\u200c", "5\u200d", "5\u202a", "\u200b5", "5\ufeff"])
def test_parse_number_strips_invisible_characters(raw):
    assert parse_number(raw) == 5


def test_parse_rejects_overlong_input():
    with pytest.raises(MalformedInput):
        parse_answer_text("1" * 33)
