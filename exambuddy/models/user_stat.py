"""UserStat model: answer counters for one (user, topic) pair."""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from exambuddy.db.session import Base
from exambuddy.models.user import new_id


class UserStat(Base):
    __tablename__ = "user_stats"
    __table_args__ = (
        UniqueConstraint("user_id", "topic", name="uq_user_stats_user_topic"),
        CheckConstraint("total >= 0 AND correct >= 0 AND incorrect >= 0", name="ck_user_stats_non_negative"),
        CheckConstraint("total = correct + incorrect", name="ck_user_stats_total"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    topic = Column(String(255), nullable=False)

    total = Column(Integer, nullable=False, default=0)
    correct = Column(Integer, nullable=False, default=0)
    incorrect = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True)

    user = relationship("User", back_populates="stats")
