from exambuddy.schemas.auth import CredentialsSchema, PreferenceSchema, TokenOutSchema, UserOutSchema
from exambuddy.schemas.question import (
    EvaluateOutSchema,
    EvaluateRequestSchema,
    QuestionOutSchema,
    QuestionRequestSchema,
)
from exambuddy.schemas.stats import (
    AnswerRecordSchema,
    DashboardOutSchema,
    StatsMapping,
    TopicCardSchema,
    TopicStatsSchema,
)

__all__ = [
    "AnswerRecordSchema",
    "CredentialsSchema",
    "DashboardOutSchema",
    "EvaluateOutSchema",
    "EvaluateRequestSchema",
    "PreferenceSchema",
    "QuestionOutSchema",
    "QuestionRequestSchema",
    "StatsMapping",
    "TokenOutSchema",
    "TopicCardSchema",
    "TopicStatsSchema",
    "UserOutSchema",
]
