"""Accuracy percentage, badge tiers and weakest-topic ranking for the dashboard."""
import math
from collections.abc import Iterable, Mapping

from exambuddy.schemas.stats import (
    BadgeSchema,
    DashboardOutSchema,
    TopicCardSchema,
    TopicStatsSchema,
    WeakTopicSchema,
)

# Highest first; lower bound inclusive
BADGE_TIERS = [
    (90, "Expert", "success"),
    (75, "Proficient", "success"),
    (50, "Learning", "warning"),
    (0, "Needs Work", "danger"),
]

WEAK_TOPIC_MIN_ANSWERS = 5
WEAK_TOPIC_LIMIT = 2

EMPTY_STATS = TopicStatsSchema()


def percentage(stat: TopicStatsSchema) -> int:
    """Return correct/total as a whole percentage, 0 when nothing was answered.

    Halves round up, as the browser's Math.round does.
    """
    if not stat.total:
        return 0
    return math.floor(stat.correct / stat.total * 100 + 0.5)


def badge(pct: int) -> BadgeSchema:
    for low, label, tone in BADGE_TIERS:
        if pct >= low:
            return BadgeSchema(label=label, tone=tone)
    return BadgeSchema(label="Needs Work", tone="danger")


def badge_tier(pct: int) -> str:
    """Return the badge label for a percentage."""
    return badge(pct).label


def weak_topics(
    stats: Mapping[str, TopicStatsSchema],
    topics: Iterable[str] | None = None,
    limit: int = WEAK_TOPIC_LIMIT,
) -> list[WeakTopicSchema]:
    """Return up to ``limit`` topics with at least 5 answers, lowest accuracy first.

    Ties keep the order of ``topics`` (the stats' own order when omitted).
    """
    order = list(topics) if topics is not None else list(stats)
    candidates = []
    for topic in order:
        stat = stats.get(topic, EMPTY_STATS)
        if stat.total < WEAK_TOPIC_MIN_ANSWERS:
            continue
        candidates.append(WeakTopicSchema(topic=topic, percentage=percentage(stat)))
    # sorted() is stable
    return sorted(candidates, key=lambda w: w.percentage)[:limit]


def topic_card(topic: str, stat: TopicStatsSchema) -> TopicCardSchema:
    pct = percentage(stat)
    return TopicCardSchema(
        topic=topic,
        total=stat.total,
        correct=stat.correct,
        incorrect=stat.incorrect,
        percentage=pct,
        badge=badge(pct),
    )


def topic_cards(stats: Mapping[str, TopicStatsSchema], topics: Iterable[str]) -> list[TopicCardSchema]:
    return [topic_card(topic, stats.get(topic, EMPTY_STATS)) for topic in topics]


def build_dashboard(
    subject: str,
    stats: Mapping[str, TopicStatsSchema],
    topics: Iterable[str],
) -> DashboardOutSchema:
    """Derive the whole dashboard view for one subject's topic list."""
    topics = list(topics)
    cards = topic_cards(stats, topics)
    total_answered = sum(c.total for c in cards)
    total_correct = sum(c.correct for c in cards)
    overall = percentage(TopicStatsSchema(total=total_answered, correct=total_correct, incorrect=total_answered - total_correct))
    return DashboardOutSchema(
        subject=subject,
        topics=cards,
        weak_topics=weak_topics(stats, topics),
        total_answered=total_answered,
        total_correct=total_correct,
        overall_percentage=overall,
    )
