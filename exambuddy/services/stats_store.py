"""Storage for per-(user, topic) answer counters.

The backend is chosen once at startup from ``Settings.stats_store``; tests
swap in ``InMemoryStatsStore`` through the same interface.
"""
import logging
from abc import ABC, abstractmethod

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from exambuddy.models.user_stat import UserStat
from exambuddy.schemas.stats import TopicStatsSchema

logger = logging.getLogger(__name__)


class StatsStore(ABC):
    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[tuple[str, TopicStatsSchema]]:
        """Return (topic, counters) for every row the user owns."""

    @abstractmethod
    async def increment(self, user_id: str, topic: str, is_correct: bool) -> None:
        """Add one answer to the (user, topic) counters, creating them if needed."""

    @abstractmethod
    async def delete_for_user(self, user_id: str) -> int:
        """Delete every row the user owns; return how many went."""


class SqlAlchemyStatsStore(StatsStore):
    """Counters in the ``user_stats`` table.

    Increments are a single ``UPDATE ... SET total = total + 1`` so two
    concurrent answers for the same topic cannot overwrite each other.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: str) -> list[tuple[str, TopicStatsSchema]]:
        # plain columns: entities in the identity map miss the SQL-side increments
        result = await self.db.execute(
            select(UserStat.topic, UserStat.total, UserStat.correct, UserStat.incorrect)
            .where(UserStat.user_id == user_id)
            .order_by(UserStat.topic)
        )
        return [
            (row.topic, TopicStatsSchema(total=row.total, correct=row.correct, incorrect=row.incorrect))
            for row in result.all()
        ]

    async def _bump(self, user_id: str, topic: str, is_correct: bool) -> int:
        values = {"total": UserStat.total + 1}
        if is_correct:
            values["correct"] = UserStat.correct + 1
        else:
            values["incorrect"] = UserStat.incorrect + 1
        result = await self.db.execute(
            update(UserStat)
            .where(UserStat.user_id == user_id, UserStat.topic == topic)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def increment(self, user_id: str, topic: str, is_correct: bool) -> None:
        if await self._bump(user_id, topic, is_correct):
            await self.db.commit()
            return

        self.db.add(
            UserStat(
                user_id=user_id,
                topic=topic,
                total=1,
                correct=1 if is_correct else 0,
                incorrect=0 if is_correct else 1,
            )
        )
        try:
            await self.db.commit()
        except IntegrityError:
            # another request created the row first
            await self.db.rollback()
            logger.info("user_stats row for user=%s topic=%r created concurrently; retrying update", user_id, topic)
            await self._bump(user_id, topic, is_correct)
            await self.db.commit()

    async def delete_for_user(self, user_id: str) -> int:
        result = await self.db.execute(
            delete(UserStat)
            .where(UserStat.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        return result.rowcount or 0


class InMemoryStatsStore(StatsStore):
    """Process-local counters for development and tests."""

    def __init__(self):
        self._rows: dict[str, dict[str, TopicStatsSchema]] = {}

    async def list_for_user(self, user_id: str) -> list[tuple[str, TopicStatsSchema]]:
        return [(topic, stat.model_copy()) for topic, stat in self._rows.get(user_id, {}).items()]

    async def increment(self, user_id: str, topic: str, is_correct: bool) -> None:
        stat = self._rows.setdefault(user_id, {}).setdefault(topic, TopicStatsSchema())
        stat.total += 1
        if is_correct:
            stat.correct += 1
        else:
            stat.incorrect += 1

    async def delete_for_user(self, user_id: str) -> int:
        return len(self._rows.pop(user_id, {}))
