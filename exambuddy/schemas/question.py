"""Pydantic schemas for question generation, answer evaluation and the tutor."""

from pydantic import BaseModel, Field

from exambuddy.schemas.base import CamelSchema


class QuestionRequestSchema(BaseModel):
    topic: str | None = None
    subject: str | None = None


class QuestionOutSchema(BaseModel):
    question: str
    choices: list[str] = Field(min_length=4, max_length=4)
    answer: str
    explanation: str = ""


class EvaluateRequestSchema(CamelSchema):
    user_answer: str | None = None
    correct_answer: str | None = None
    explanation: str | None = None


class EvaluateOutSchema(CamelSchema):
    is_correct: bool
    feedback: str


class TutorMessageSchema(BaseModel):
    role: str = "user"
    content: str = ""


class TutorRequestSchema(BaseModel):
    subject: str | None = None
    topic: str | None = None
    question: str | None = None
    history: list[TutorMessageSchema] = []


class TutorOutSchema(CamelSchema):
    answer: str
    key_points: list[str]
