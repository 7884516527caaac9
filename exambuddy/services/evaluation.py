"""Answer checking for generated questions."""
from exambuddy.core.errors import ValidationError
from exambuddy.schemas.question import EvaluateOutSchema


def evaluate_answer(user_answer: str | None, correct_answer: str | None, explanation: str | None = None) -> EvaluateOutSchema:
    """Exact comparison of the chosen answer with the correct one."""
    if not user_answer or not correct_answer:
        raise ValidationError("Missing answer data.")
    is_correct = user_answer == correct_answer
    prefix = "✅ Correct!" if is_correct else "❌ Incorrect."
    return EvaluateOutSchema(is_correct=is_correct, feedback=f"{prefix} {explanation or ''}")
