"""Pydantic schemas for topic stats and the derived dashboard."""
from pydantic import BaseModel, Field, field_validator

from exambuddy.schemas.base import CamelSchema

MAX_TOPIC_LENGTH = 255


class TopicStatsSchema(BaseModel):
    total: int = Field(default=0, ge=0)
    correct: int = Field(default=0, ge=0)
    incorrect: int = Field(default=0, ge=0)


# topic -> counters
StatsMapping = dict[str, TopicStatsSchema]


class AnswerRecordSchema(BaseModel):
    topic: str = ""
    correct: bool = False

    @field_validator("topic")
    @classmethod
    def _strip_topic(cls, value: str) -> str:
        return value.strip()


class ResetOutSchema(BaseModel):
    status: str = "reset"


class BadgeSchema(BaseModel):
    label: str
    tone: str  # success | warning | danger


class TopicCardSchema(BaseModel):
    topic: str
    total: int
    correct: int
    incorrect: int
    percentage: int
    badge: BadgeSchema


class WeakTopicSchema(BaseModel):
    topic: str
    percentage: int


class DashboardOutSchema(CamelSchema):
    subject: str
    topics: list[TopicCardSchema]
    weak_topics: list[WeakTopicSchema]
    total_answered: int
    total_correct: int
    overall_percentage: int
