"""SQLAlchemy declarative base and model imports for Alembic."""
from exambuddy.db.session import Base

# Import all models so Alembic can see them
from exambuddy.models.user import User  # noqa: F401
from exambuddy.models.user_stat import UserStat  # noqa: F401

__all__ = ["Base", "User", "UserStat"]
