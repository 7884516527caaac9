from exambuddy.services.tutor import extract_key_points


def test_bullets_come_first():
    answer = (
        "Here is what matters:\n"
        "- Premiums are paid in advance of coverage\n"
        "* Deductibles reduce the insurer's payout\n"
        "- ok\n"
        "That is all."
    )
    # no key phrases and the only "sentence" is too long to use
    assert extract_key_points(answer) == [
        "Premiums are paid in advance of coverage",
        "Deductibles reduce the insurer's payout",
    ]


def test_numbered_items_are_not_duplicated():
    answer = "1. Always read the declarations page\n2. Always read the declarations page\n3. Check exclusions carefully"
    points = extract_key_points(answer)
    assert points[:2] == ["Always read the declarations page", "Check exclusions carefully"]


def test_key_phrase_sentences_fill_in():
    answer = "Insurance spreads risk across many people. It is important to understand indemnity well. Cats are nice."
    points = extract_key_points(answer)
    assert points[0] == "It is important to understand indemnity well"
    assert "Insurance spreads risk across many people" in points


def test_at_most_four_points():
    answer = "\n".join(f"- Point number {i} is a long enough line" for i in range(10))
    assert len(extract_key_points(answer)) == 4


def test_empty_answer():
    assert extract_key_points("") == []
