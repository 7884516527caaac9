"""User model: email/password account that owns its topic stats."""
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from exambuddy.db.session import Base

DEFAULT_SUBJECT = "Insurance Exam"


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    current_subject = Column(String(255), nullable=False, default=DEFAULT_SUBJECT, server_default=DEFAULT_SUBJECT)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    stats = relationship(
        "UserStat",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
