"""Per-user topic stats: read, record an answer, reset."""
import logging

from exambuddy.core.errors import AuthenticationError, ValidationError
from exambuddy.schemas.stats import MAX_TOPIC_LENGTH, StatsMapping
from exambuddy.services.stats_store import StatsStore

logger = logging.getLogger(__name__)


class UserStatsService:
    def __init__(self, store: StatsStore):
        self.store = store

    @staticmethod
    def _require_user(user_id: str | None) -> str:
        if not user_id:
            raise AuthenticationError("No user in token")
        return str(user_id)

    async def get_stats(self, user_id: str | None) -> StatsMapping:
        """Return every topic the user has answered, keyed by topic."""
        user_id = self._require_user(user_id)
        return dict(await self.store.list_for_user(user_id))

    async def record_answer(self, user_id: str | None, topic: str | None, is_correct: bool) -> StatsMapping:
        """Count one answer for ``topic`` and return the user's full mapping."""
        user_id = self._require_user(user_id)
        topic = (topic or "").strip()
        if not topic:
            raise ValidationError("Missing topic.")
        if len(topic) > MAX_TOPIC_LENGTH:
            raise ValidationError(f"Topic must be at most {MAX_TOPIC_LENGTH} characters.")

        await self.store.increment(user_id, topic, bool(is_correct))
        logger.info("Recorded %s answer for user=%s topic=%r", "correct" if is_correct else "incorrect", user_id, topic)
        return await self.get_stats(user_id)

    async def reset_stats(self, user_id: str | None) -> None:
        user_id = self._require_user(user_id)
        deleted = await self.store.delete_for_user(user_id)
        logger.info("Reset stats for user=%s (%d rows)", user_id, deleted)
