from pydantic import BaseModel


class QuestionOut(BaseModel):
    a: int
    b: int
    level: int


class AnswerRequest(BaseModel):
    a: int
    b: int
    user_answer: int


class AnswerResponse(BaseModel):
    is_correct: bool
    correct: int
