from game.progression import GameSession


class RoundResponse(GameSession):
    question_text: str
    required_answers: int
    progress: int
    attempts_unlimited: bool
    elapsed_text: str
