import pytest

from exambuddy.schemas.stats import TopicStatsSchema
from exambuddy.services.scoring import badge, badge_tier, build_dashboard, percentage, weak_topics


def stat(total, correct):
    return TopicStatsSchema(total=total, correct=correct, incorrect=total - correct)


def test_percentage_of_unanswered_topic_is_zero():
    assert percentage(TopicStatsSchema()) == 0


def test_percentage_rounds_to_whole_number():
    assert percentage(stat(10, 7)) == 70
    assert percentage(stat(3, 2)) == 67
    assert percentage(stat(3, 1)) == 33


def test_percentage_rounds_halves_up():
    assert percentage(stat(8, 1)) == 13  # 12.5
    assert percentage(stat(40, 1)) == 3  # 2.5


def test_percentage_divides_before_scaling():
    # 29 / 200 * 100 is 14.499999999999998 in floating point
    assert percentage(stat(200, 29)) == 14


@pytest.mark.parametrize(
    "pct,label",
    [(100, "Expert"), (90, "Expert"), (89, "Proficient"), (75, "Proficient"), (74, "Learning"), (50, "Learning"), (49, "Needs Work"), (0, "Needs Work")],
)
def test_badge_tier_thresholds(pct, label):
    assert badge_tier(pct) == label


def test_badge_tone():
    assert badge(95).tone == "success"
    assert badge(60).tone == "warning"
    assert badge(10).tone == "danger"


def test_weak_topics_ignores_topics_with_fewer_than_five_answers():
    stats = {"A": stat(4, 0), "B": stat(5, 4), "C": stat(10, 9)}
    weak = weak_topics(stats, ["A", "B", "C"])
    assert [w.topic for w in weak] == ["B", "C"]
    assert [w.percentage for w in weak] == [80, 90]


def test_weak_topics_returns_at_most_two_lowest_first():
    stats = {"A": stat(5, 5), "B": stat(5, 1), "C": stat(5, 3), "D": stat(5, 2)}
    weak = weak_topics(stats, ["A", "B", "C", "D"])
    assert [w.topic for w in weak] == ["B", "D"]


def test_weak_topics_ties_keep_topic_order():
    stats = {"A": stat(5, 2), "B": stat(10, 4), "C": stat(5, 2)}
    assert [w.topic for w in weak_topics(stats, ["C", "B", "A"])] == ["C", "B"]
    assert [w.topic for w in weak_topics(stats, ["A", "B", "C"])] == ["A", "B"]


def test_weak_topics_defaults_to_stats_order():
    stats = {"X": stat(6, 0), "Y": stat(6, 0)}
    assert [w.topic for w in weak_topics(stats)] == ["X", "Y"]


def test_weak_topics_empty():
    assert weak_topics({}, ["A"]) == []


def test_build_dashboard_covers_every_listed_topic():
    stats = {"A": stat(10, 9), "B": stat(5, 1), "Other": stat(50, 0)}
    view = build_dashboard("Subject", stats, ["A", "B", "C"])

    assert [c.topic for c in view.topics] == ["A", "B", "C"]
    assert view.topics[0].badge.label == "Expert"
    assert view.topics[1].percentage == 20
    assert view.topics[2].total == 0
    assert view.topics[2].badge.label == "Needs Work"
    # topics outside the subject are not counted
    assert view.total_answered == 15
    assert view.total_correct == 10
    assert view.overall_percentage == 67
    assert [w.topic for w in view.weak_topics] == ["B", "A"]


def test_dashboard_serializes_camel_case():
    data = build_dashboard("S", {}, ["A"]).model_dump(by_alias=True)
    assert set(data) == {"subject", "topics", "weakTopics", "totalAnswered", "totalCorrect", "overallPercentage"}
