"""One AI-authored multiple-choice question per call."""
import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from exambuddy.core.errors import UpstreamError, ValidationError
from exambuddy.schemas.question import QuestionOutSchema
from exambuddy.services.llm import best_effort_json_parse, chat_completion
from exambuddy.services.subjects import Subject, get_subject, subject_for_topic

logger = logging.getLogger(__name__)

CHOICE_COUNT = 4
_CHOICE_SPLIT_RE = re.compile(r"\r?\n|,|;")

PROMPT_TEMPLATE = """You are a helpful and knowledgeable {subject} tutor.
Generate an original multiple-choice question for the topic: {topic} ({exam}).
Provide exactly four answer choices as a JSON array of strings (not as a single string).
Mark the correct answer with the "answer" key, and provide a brief explanation.
Format your response as strict JSON with these keys: question (string), choices (array of 4 strings), answer (string), explanation (string).
Example:
{{
  "question": "What is the purpose of subrogation in insurance?",
  "choices": ["To allow double payment", "To reduce premiums", "To recover from third parties", "To eliminate deductibles"],
  "answer": "To recover from third parties",
  "explanation": "Subrogation allows the insurer to recover the amount paid to the insured from a liable third party."
}}"""


def resolve_subject(topic: str | None, subject_name: str | None) -> tuple[str, Subject]:
    """Validate the (topic, subject) pair against the catalog."""
    topic = (topic or "").strip()
    if not topic:
        raise ValidationError("Invalid or missing topic.")

    if subject_name:
        subject = get_subject(subject_name)
        if subject is None:
            raise ValidationError(f"Unknown subject: {subject_name}")
        if not subject.accepts(topic):
            raise ValidationError(f"Topic {topic!r} is not part of {subject.name}.")
        return topic, subject

    subject = subject_for_topic(topic)
    if subject is None:
        raise ValidationError("Invalid or missing topic.")
    return topic, subject


def normalize_choices(choices: Any) -> list:
    if isinstance(choices, list):
        return choices
    if isinstance(choices, str):
        return [c.strip() for c in _CHOICE_SPLIT_RE.split(choices) if c.strip()]
    return []


def parse_question(raw: str) -> QuestionOutSchema:
    """Turn the model's reply into a question, or raise UpstreamError."""
    data = best_effort_json_parse(raw)
    if not data or not data.get("question"):
        raise UpstreamError("Failed to generate question.", details="Malformed AI response")

    choices = normalize_choices(data.get("choices"))
    if len(choices) != CHOICE_COUNT or not all(isinstance(c, str) for c in choices):
        raise UpstreamError("AI response did not return 4 answer choices. Please try again.")

    try:
        return QuestionOutSchema(
            question=data["question"],
            choices=choices,
            answer=data.get("answer", ""),
            explanation=data.get("explanation") or "",
        )
    except PydanticValidationError as exc:
        raise UpstreamError("Failed to generate question.", details=str(exc)) from exc


class QuestionGenerator:
    def __init__(self, client: Any, model: str, max_tokens: int = 300):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def generate(self, topic: str | None, subject_name: str | None = None) -> QuestionOutSchema:
        topic, subject = resolve_subject(topic, subject_name)
        if self.client is None:
            raise UpstreamError("OPENAI_API_KEY not set")
        prompt = PROMPT_TEMPLATE.format(subject=subject.name, topic=topic, exam=subject.exam)
        raw = await chat_completion(
            self.client,
            self.model,
            [{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
        )
        try:
            return parse_question(raw)
        except UpstreamError:
            logger.warning("Unusable question from %s for topic=%r: %.200s", self.model, topic, raw)
            raise
