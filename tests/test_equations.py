import random

import pytest

from game.codec import parse_history
from game.equations import EquationSession, generate_equation, play_equation_round
from game.errors import MalformedInput
from settings import GameSettings

SETTINGS = GameSettings(equations_required_answers=3)


@pytest.mark.parametrize("difficulty", ["1", "2", "3"])
def test_generated_equations_are_well_formed(difficulty):
    rng = random.Random(9)
    for _ in range(500):
        eq = generate_equation(difficulty, rng)
        assert eq.operator in ("+", "-", "×", "÷")
        if eq.operator == "-":
            assert eq.a >= eq.b
        if eq.operator == "÷":
            assert eq.b != 0
            assert eq.a % eq.b == 0


def test_tier_one_stays_small():
    rng = random.Random(1)
    for _ in range(300):
        eq = generate_equation("1", rng)
        if eq.operator in ("+", "-"):
            assert eq.a <= 10 and eq.b <= 10
        if eq.operator == "×":
            assert eq.a <= 5 and eq.b <= 5


def _generate(rng):
    return play_equation_round(EquationSession(difficulty="2"), "generate", SETTINGS, rng)


def _submit(s, answer, rng):
    return play_equation_round(s.model_copy(update={"user_answer": answer}), "submit", SETTINGS, rng)


def test_submit_correct_and_wrong():
    rng = random.Random(4)
    s = _generate(rng)
    assert s.total_answered == 0
    s = _submit(s, str(s.correct_answer), rng)
    assert s.answer_checked and s.is_correct
    assert s.total_answered == 1

    s = play_equation_round(s, "next", SETTINGS, rng)
    assert not s.answer_checked
    s = _submit(s, str(s.correct_answer + 1), rng)
    assert not s.is_correct
    assert s.total_answered == 2
    assert [e.is_correct for e in parse_history(s.history_raw)] == [True, False]


def test_decimal_comma_answer_accepted():
    rng = random.Random(0)
    s = EquationSession(difficulty="3", a=7, b=2, operator="÷")
    s = _submit(s, "3,5", rng)
    assert s.is_correct
    assert s.correct_answer == 3.5


def test_duplicate_submission_not_counted():
    rng = random.Random(5)
    s = _generate(rng)
    s = _submit(s, str(s.correct_answer), rng)
    again = _submit(s, str(s.correct_answer), rng)
    assert again.duplicate is True
    assert again.total_answered == 1
    assert again.history_raw == s.history_raw


def test_finished_after_required_answers():
    rng = random.Random(6)
    s = _generate(rng)
    for _ in range(3):
        s = _submit(s, str(s.correct_answer), rng)
        s = play_equation_round(s, "next", SETTINGS, rng)
    assert s.total_answered == 3
    a, b = s.a, s.b
    # no new question and no more grading once finished
    s = play_equation_round(s, "next", SETTINGS, rng)
    assert (s.a, s.b) == (a, b)
    s = _submit(s, "0", rng)
    assert s.total_answered == 3
    assert len(parse_history(s.history_raw)) == 3


def test_generate_resets_history():
    rng = random.Random(8)
    s = _generate(rng)
    s = _submit(s, str(s.correct_answer), rng)
    s = play_equation_round(s, "generate", SETTINGS, rng)
    assert s.total_answered == 0
    assert parse_history(s.history_raw) == []


def test_bad_equation_input_rejected():
    rng = random.Random(0)
    with pytest.raises(MalformedInput):
        _submit(EquationSession(a=1, b=0, operator="÷"), "1", rng)
    with pytest.raises(MalformedInput):
        _submit(EquationSession(a=1, b=2, operator="%"), "1", rng)
    with pytest.raises(MalformedInput):
        _submit(EquationSession(a=1, b=2, operator="+"), "abc", rng)
