"""Diagnostics routes for checking auth wiring from a deployed frontend."""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from exambuddy.core.errors import AuthenticationError, ValidationError
from exambuddy.core.security import decode_access_token
from exambuddy.routers.deps import CurrentUser

router = APIRouter(prefix="/api/diagnostics", tags=["diagnostics"])
logger = logging.getLogger(__name__)


class TokenCheckSchema(BaseModel):
    token: str | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/public")
async def public():
    return {"status": "success", "message": "Public endpoint is working", "timestamp": _now()}


@router.get("/protected")
async def protected(current_user: CurrentUser):
    logger.info("Protected diagnostics endpoint accessed by user %s", current_user.id)
    return {
        "status": "success",
        "message": "Protected endpoint is working",
        "user": {"id": current_user.id, "email": current_user.email},
        "timestamp": _now(),
    }


@router.post("/verify-token")
async def verify_token(body: TokenCheckSchema):
    """Decode a token without touching the database."""
    if not body.token:
        raise ValidationError("No token provided")
    try:
        payload = decode_access_token(body.token)
    except AuthenticationError as exc:
        raise ValidationError("Token verification failed", details=exc.message) from exc
    return {
        "status": "success",
        "message": "Token is valid",
        "decoded": payload,
        "expiresAt": datetime.fromtimestamp(payload["exp"], tz=timezone.utc).isoformat(),
    }
