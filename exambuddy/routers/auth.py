"""Auth routes: register, login, current user. Bearer-token auth (JWT)."""
from __future__ import annotations

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from exambuddy.core.config import get_settings
from exambuddy.core.errors import AuthenticationError, ConflictError, ValidationError
from exambuddy.core.security import create_access_token, hash_password, verify_password
from exambuddy.db.session import get_db
from exambuddy.models.user import User
from exambuddy.routers.deps import CurrentUser
from exambuddy.schemas.auth import CredentialsSchema, MeOutSchema, TokenOutSchema, UserOutSchema

router = APIRouter(prefix="/api/auth", tags=["auth"])
settings = get_settings()
logger = logging.getLogger(__name__)

# Simple, practical email check
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt hard limit


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _token_response(user: User) -> TokenOutSchema:
    return TokenOutSchema(
        token=create_access_token(user.id),
        user=UserOutSchema(id=user.id, email=user.email),
    )


@router.post("/register", response_model=TokenOutSchema)
async def register(
    body: CredentialsSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a user and return a token for it."""
    email_norm = _normalize_email(body.email)
    pwd = body.password or ""
    if not email_norm or not pwd:
        raise ValidationError("Missing email or password.")
    if not EMAIL_RE.match(email_norm):
        raise ValidationError("Invalid email address.")
    if len(pwd) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    if len(pwd.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")

    logger.info("Registration attempt for %s", email_norm)
    result = await db.execute(select(User).where(User.email == email_norm))
    if result.scalar_one_or_none() is not None:
        logger.info("Email already registered: %s", email_norm)
        raise ConflictError("Email already registered.")

    user = User(
        email=email_norm,
        hashed_password=hash_password(pwd),
        current_subject=settings.default_subject,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Email already registered.") from exc
    await db.refresh(user)

    logger.info("User created with id %s", user.id)
    return _token_response(user)


@router.post("/login", response_model=TokenOutSchema)
async def login(
    body: CredentialsSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Check credentials and return a fresh token."""
    email_norm = _normalize_email(body.email)
    if not email_norm or not body.password:
        raise ValidationError("Missing email or password.")

    result = await db.execute(select(User).where(User.email == email_norm))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(body.password, user.hashed_password):
        logger.info("Failed login for %s", email_norm)
        raise AuthenticationError("Invalid credentials.")

    logger.info("Login for user %s", user.id)
    return _token_response(user)


@router.get("/me", response_model=MeOutSchema)
async def me(current_user: CurrentUser):
    return MeOutSchema(
        id=current_user.id,
        email=current_user.email,
        current_subject=current_user.current_subject,
    )
