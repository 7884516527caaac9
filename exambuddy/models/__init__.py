from exambuddy.models.user import User
from exambuddy.models.user_stat import UserStat

__all__ = ["User", "UserStat"]
