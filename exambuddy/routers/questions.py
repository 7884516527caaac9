"""Question routes: AI question generation, answer evaluation, tutor chat."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from exambuddy.core.config import Settings, get_settings
from exambuddy.routers.deps import get_question_generator, get_tutor_service
from exambuddy.schemas.question import (
    EvaluateOutSchema,
    EvaluateRequestSchema,
    QuestionOutSchema,
    QuestionRequestSchema,
    TutorOutSchema,
    TutorRequestSchema,
)
from exambuddy.services.evaluation import evaluate_answer
from exambuddy.services.llm import run_until_disconnected
from exambuddy.services.question_generator import QuestionGenerator
from exambuddy.services.tutor import TutorService

router = APIRouter(prefix="/api", tags=["questions"])


@router.post("/generate-question", response_model=QuestionOutSchema)
async def generate_question(
    request: Request,
    body: QuestionRequestSchema,
    generator: Annotated[QuestionGenerator, Depends(get_question_generator)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """One multiple-choice question for the topic, written by the LLM."""
    return await run_until_disconnected(
        request,
        generator.generate(body.topic, body.subject),
        settings.disconnect_poll_seconds,
    )


@router.post("/evaluate-answer", response_model=EvaluateOutSchema)
async def evaluate(body: EvaluateRequestSchema):
    return evaluate_answer(body.user_answer, body.correct_answer, body.explanation)


@router.post("/tutor-response", response_model=TutorOutSchema)
async def tutor_response(
    request: Request,
    body: TutorRequestSchema,
    tutor: Annotated[TutorService, Depends(get_tutor_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    return await run_until_disconnected(
        request,
        tutor.respond(body.subject, body.topic, body.question, body.history),
        settings.disconnect_poll_seconds,
    )
