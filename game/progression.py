"""
Round-by-round progression of the multiplication game.

The server keeps no session memory: the client posts the whole GameSession, the
state machine returns the next one. Rules, in order of precedence:

  1. start a new game  (no question yet, lives exhausted + "next", or won + "next")
  1a. skip ahead       (wrong answer acknowledged with "next", still alive)
  2. parse + grade the submitted answer
  3. correct   -> streak, solved set, bonus life, maybe won, else next question
  4. incorrect -> lose a life (when lives are limited), maybe lost, else same question
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

from pydantic import BaseModel

from game.answers import parse_answer_text
from game.codec import (
    HistoryEntry,
    parse_history,
    parse_solved,
    serialize_history,
    serialize_solved,
    update_solved,
)
from game.errors import MalformedInput
from game.grader import grade
from game.selector import QuestionService
from game.texts import question_text
from settings import GameSettings

logger = logging.getLogger(__name__)


class GameSession(BaseModel):
    level: int = 20
    a: int = 0
    b: int = 0
    user_answer: Optional[str] = None

    streak: int = 0
    attempts_left: int = 3
    perfect_streak: int = 0
    solved_questions: str = ""
    history_raw: str = ""
    mode: str = "normal"

    # client signal: "show me the next question"
    next_question: bool = False

    # per-question flags
    answer_checked: bool = False
    is_correct: bool = False
    correct_answer: int = 0
    bonus_awarded: bool = False

    game_won: bool = False
    game_lost: bool = False
    pool_exhausted: bool = False

    # epoch milliseconds; 0 = not started
    game_start_time: int = 0
    game_elapsed_seconds: int = 0


def now_ms() -> int:
    return int(time.time() * 1000)


def lives_exhausted(s: GameSession, settings: GameSettings) -> bool:
    return settings.initial_attempts > 0 and s.attempts_left <= 0


def should_start_new_game(s: GameSession, settings: GameSettings) -> bool:
    if s.a == 0 and s.b == 0:
        return True
    if s.answer_checked and s.next_question and lives_exhausted(s, settings):
        return True
    return s.answer_checked and s.next_question and s.is_correct


def should_skip_ahead(s: GameSession, settings: GameSettings) -> bool:
    return (
        s.answer_checked
        and s.next_question
        and not s.is_correct
        and not s.game_lost
        and not lives_exhausted(s, settings)
    )


def _reset_question_state(s: GameSession) -> None:
    s.answer_checked = False
    s.is_correct = False
    s.correct_answer = 0
    s.user_answer = None


def _load_next_question(
    s: GameSession, solved: List[str], questions: QuestionService
) -> List[str]:
    """Puts a fresh question on the session; returns the (possibly cleared) solved keys."""
    q = questions.get_question(s.level, solved)
    if q.exhausted and solved:
        # every pair of the level is solved but the game goes on: start the pool over
        logger.info(
            "Pool exhausted at level %d with streak %d; clearing %d solved keys",
            s.level,
            s.streak,
            len(solved),
        )
        solved = []
        q = questions.get_question(s.level, solved)
    s.pool_exhausted = q.exhausted
    s.a, s.b, s.level = q.a, q.b, q.level
    _reset_question_state(s)
    return solved


def _start_new_game(
    s: GameSession, settings: GameSettings, questions: QuestionService, now: int
) -> GameSession:
    s.streak = 0
    s.perfect_streak = 0
    s.attempts_left = settings.initial_attempts
    s.history_raw = serialize_history([])
    s.game_won = False
    s.game_lost = False
    s.game_start_time = now
    s.game_elapsed_seconds = 0
    _load_next_question(s, [], questions)
    s.solved_questions = serialize_solved([])
    logger.info("New game started: level=%d attempts=%d", s.level, s.attempts_left)
    return s


def play_round(
    session: GameSession,
    settings: GameSettings,
    questions: QuestionService,
    now: Optional[int] = None,
) -> GameSession:
    """
    Returns the next session state; ``session`` itself is left untouched.
    Raises InvalidLevel / MalformedInput before any counter changes.
    """
    now = now_ms() if now is None else now
    questions.check_level(session.level)

    s = session.model_copy()
    s.bonus_awarded = False
    s.pool_exhausted = False

    if should_start_new_game(s, settings):
        s.next_question = False
        return _start_new_game(s, settings, questions, now)

    solved = parse_solved(s.solved_questions)

    if should_skip_ahead(s, settings):
        s.next_question = False
        solved = _load_next_question(s, solved, questions)
        s.solved_questions = serialize_solved(solved)
        return s

    s.next_question = False
    if s.game_won or s.game_lost:
        # terminal until the client asks for the next game
        return s

    if not questions.has_pair(s.a, s.b, s.level):
        raise MalformedInput(f"{s.a} x {s.b} is not a question of level {s.level}")

    user_value = parse_answer_text(s.user_answer)
    history = parse_history(s.history_raw)

    if s.game_start_time > 0:
        s.game_elapsed_seconds = max(0, (now - s.game_start_time) // 1000)

    result = grade(user_value, s.a, s.b)
    s.answer_checked = True
    s.is_correct = result.is_correct
    s.correct_answer = int(result.correct_answer)
    history.append(
        HistoryEntry(
            question_text=question_text(s.a, s.b),
            correct_answer=result.correct_answer,
            user_answer=str(user_value),
            is_correct=result.is_correct,
        )
    )

    if result.is_correct:
        solved = _handle_correct(s, settings, questions, solved)
    else:
        solved = _handle_incorrect(s, settings, solved)

    s.solved_questions = serialize_solved(solved)
    s.history_raw = serialize_history(history)
    return s


def _handle_correct(
    s: GameSession, settings: GameSettings, questions: QuestionService, solved: List[str]
) -> List[str]:
    s.streak += 1
    s.perfect_streak += 1
    solved = update_solved(solved, s.a, s.b)

    if settings.bonus_enabled() and s.perfect_streak >= settings.bonus_attempts_threshold:
        # may go above initial_attempts
        s.attempts_left += 1
        s.bonus_awarded = True
        s.perfect_streak = 0
        logger.info("Bonus life awarded: attempts_left=%d", s.attempts_left)

    if s.streak >= settings.required_correct_answers:
        s.game_won = True
        logger.info(
            "Game won: level=%d streak=%d elapsed=%ss", s.level, s.streak, s.game_elapsed_seconds
        )
        return solved

    return _load_next_question(s, solved, questions)


def _handle_incorrect(s: GameSession, settings: GameSettings, solved: List[str]) -> List[str]:
    s.perfect_streak = 0
    if settings.initial_attempts > 0:
        s.attempts_left -= 1

    if lives_exhausted(s, settings):
        s.streak = 0
        s.game_lost = True
        logger.info("Game lost: level=%d on %d x %d", s.level, s.a, s.b)
        return []

    # keep the question on screen so the correct answer can be shown
    return solved
