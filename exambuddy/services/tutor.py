"""Conversational tutor answers and key-point extraction."""
import re
from typing import Any

from exambuddy.core.errors import UpstreamError, ValidationError
from exambuddy.schemas.question import TutorMessageSchema, TutorOutSchema
from exambuddy.services.llm import chat_completion

MAX_KEY_POINTS = 4

_BULLET_RE = re.compile(r"[•\-*]\s+([^\n]+)")
_NUMBERED_RE = re.compile(r"\d+\.\s+([^\n]+)")
_KEY_PHRASE_RE = re.compile(r"important|key|critical|essential|fundamental|significant", re.I)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]\s+")

SYSTEM_PROMPT = """You are a trusted friend and mentor who happens to be an expert in {subject}, particularly {topic}. You're having a casual, honest conversation with someone you genuinely care about and have built trust with over time.

You speak naturally and conversationally, just like a real person would. You use a warm, friendly tone and occasionally use casual language, contractions, and even a touch of humor when appropriate. You're supportive, encouraging, and never judgmental.

When your friend asks you a question:
1. Answer it directly and honestly, just like you would in a real conversation
2. If it's a factual question (like "what is 2+2"), give the straightforward answer first ("It's 4") before adding context
3. If they're struggling with a concept, show empathy and offer practical advice
4. Share personal-sounding insights or examples that make concepts easier to understand
5. Ask follow-up questions when it would help clarify their needs

Your friend has asked: "{question}"

Respond naturally, as if you're having a real conversation:"""


def _short_sentences(answer: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(answer) if 15 < len(s.strip()) < 100]


def extract_key_points(answer: str) -> list[str]:
    """Pull up to four key points out of a free-text answer.

    Bullets first, then numbered items, then sentences mentioning a key
    phrase, then any short sentence.
    """
    points: list[str] = []
    for m in _BULLET_RE.finditer(answer):
        cleaned = m.group(1).strip()
        if len(cleaned) > 10:
            points.append(cleaned)
    for m in _NUMBERED_RE.finditer(answer):
        cleaned = m.group(1).strip()
        if len(cleaned) > 10 and cleaned not in points:
            points.append(cleaned)

    if len(points) < 3:
        phrases = [p.lower() for p in _KEY_PHRASE_RE.findall(answer)]
        for sentence in _short_sentences(answer):
            lowered = sentence.lower()
            if any(p in lowered for p in phrases) and not any(sentence in p for p in points):
                points.append(sentence)

    if len(points) < 3:
        for sentence in _short_sentences(answer):
            if not any(sentence in p for p in points):
                points.append(sentence)

    return points[:MAX_KEY_POINTS]


class TutorService:
    def __init__(self, client: Any, model: str, max_tokens: int = 500):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def respond(
        self,
        subject: str | None,
        topic: str | None,
        question: str | None,
        history: list[TutorMessageSchema] | None = None,
    ) -> TutorOutSchema:
        if not subject or not topic or not question:
            raise ValidationError(
                "Missing required parameters. Please provide subject, topic, and question."
            )
        if self.client is None:
            raise UpstreamError("OPENAI_API_KEY not set")
        messages = [{"role": "system", "content": SYSTEM_PROMPT.format(subject=subject, topic=topic, question=question)}]
        for msg in history or []:
            messages.append({"role": "user" if msg.role == "user" else "assistant", "content": msg.content})
        messages.append({"role": "user", "content": question})

        answer = await chat_completion(
            self.client,
            self.model,
            messages,
            temperature=0.7,
            max_tokens=self.max_tokens,
        )
        return TutorOutSchema(answer=answer, key_points=extract_key_points(answer))
