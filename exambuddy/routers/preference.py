"""User preference routes: the subject the user is currently studying."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from exambuddy.core.errors import ValidationError
from exambuddy.db.session import get_db
from exambuddy.routers.deps import CurrentUser
from exambuddy.schemas.auth import PreferenceSchema
from exambuddy.services.subjects import get_subject

router = APIRouter(prefix="/api/user-preference", tags=["preference"])
logger = logging.getLogger(__name__)


@router.get("", response_model=PreferenceSchema)
async def get_preference(current_user: CurrentUser):
    return PreferenceSchema(current_subject=current_user.current_subject)


@router.post("", response_model=PreferenceSchema)
async def set_preference(
    body: PreferenceSchema,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    subject_name = (body.current_subject or "").strip()
    if not subject_name:
        raise ValidationError("Missing currentSubject")
    subject = get_subject(subject_name)
    if subject is None:
        raise ValidationError(f"Unknown subject: {subject_name}")

    current_user.current_subject = subject.name
    await db.commit()
    logger.info("User %s switched subject to %r", current_user.id, subject.name)
    return PreferenceSchema(current_subject=current_user.current_subject)
