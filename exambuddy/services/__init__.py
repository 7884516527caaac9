from exambuddy.services.scoring import badge_tier, build_dashboard, percentage, weak_topics
from exambuddy.services.user_stats import UserStatsService

__all__ = ["badge_tier", "build_dashboard", "percentage", "weak_topics", "UserStatsService"]
