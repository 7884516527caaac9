"""Stats routes: per-topic counters for the current user, and the dashboard."""
from typing import Annotated

from fastapi import APIRouter, Depends

from exambuddy.core.errors import NotFoundError
from exambuddy.routers.deps import CurrentUser, get_stats_service
from exambuddy.schemas.stats import AnswerRecordSchema, DashboardOutSchema, ResetOutSchema, StatsMapping
from exambuddy.services.scoring import build_dashboard
from exambuddy.services.subjects import get_subject
from exambuddy.services.user_stats import UserStatsService

router = APIRouter(prefix="/api", tags=["stats"])

StatsService = Annotated[UserStatsService, Depends(get_stats_service)]


@router.get("/user-stats", response_model=StatsMapping)
async def get_user_stats(current_user: CurrentUser, service: StatsService):
    """All of the user's topic counters, keyed by topic."""
    return await service.get_stats(current_user.id)


@router.post("/user-stats", response_model=StatsMapping)
async def record_user_answer(body: AnswerRecordSchema, current_user: CurrentUser, service: StatsService):
    """Count one answer; return the user's updated counters."""
    return await service.record_answer(current_user.id, body.topic, body.correct)


@router.post("/user-stats/reset", response_model=ResetOutSchema)
async def reset_user_stats(current_user: CurrentUser, service: StatsService):
    await service.reset_stats(current_user.id)
    return ResetOutSchema(status="reset")


@router.get("/dashboard", response_model=DashboardOutSchema)
async def get_dashboard(
    current_user: CurrentUser,
    service: StatsService,
    subject: str | None = None,
):
    """Topic cards, weakest topics and totals for one subject (default: the user's)."""
    name = subject or current_user.current_subject
    found = get_subject(name)
    if found is None:
        raise NotFoundError(f"Unknown subject: {name}")
    stats = await service.get_stats(current_user.id)
    return build_dashboard(found.name, stats, found.topics)
