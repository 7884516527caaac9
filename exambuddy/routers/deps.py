"""Shared route dependencies: current user, services, LLM clients."""
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from exambuddy.core.config import Settings, get_settings
from exambuddy.core.errors import AuthenticationError
from exambuddy.core.security import USER_ID_CLAIM, decode_access_token
from exambuddy.db.session import get_db
from exambuddy.models.user import User
from exambuddy.services.question_generator import QuestionGenerator
from exambuddy.services.stats_store import SqlAlchemyStatsStore
from exambuddy.services.tutor import TutorService
from exambuddy.services.user_stats import UserStatsService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """Resolve the ``Authorization: Bearer`` token to a User row."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    payload = decode_access_token(credentials.credentials)
    result = await db.execute(select(User).where(User.id == str(payload[USER_ID_CLAIM])))
    user = result.scalar_one_or_none()
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_stats_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserStatsService:
    # app.state.stats_store is set at startup when STATS_STORE=memory
    store = getattr(request.app.state, "stats_store", None) or SqlAlchemyStatsStore(db)
    return UserStatsService(store)


def get_openai_client(request: Request):
    """The process-wide client built at startup, or None without an API key."""
    return getattr(request.app.state, "openai_client", None)


def get_question_generator(
    settings: Annotated[Settings, Depends(get_settings)],
    client=Depends(get_openai_client),
) -> QuestionGenerator:
    return QuestionGenerator(client, settings.openai_model, max_tokens=settings.question_max_tokens)


def get_tutor_service(
    settings: Annotated[Settings, Depends(get_settings)],
    client=Depends(get_openai_client),
) -> TutorService:
    return TutorService(client, settings.openai_tutor_model, max_tokens=settings.tutor_max_tokens)
