"""Password hashing and JWT bearer tokens."""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from exambuddy.core.config import get_settings
from exambuddy.core.errors import AuthenticationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Claim that carries the user id; every route resolves the user through it.
USER_ID_CLAIM = "userId"


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user_id: str, extra: dict[str, Any] | None = None) -> str:
    """Create a signed token with payload ``{userId, exp}``."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {USER_ID_CLAIM: str(user_id), "exp": expire}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Return the token payload or raise AuthenticationError.

    Expired tokens give 401, any other verification failure gives 403.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired", details=str(exc)) from exc
    except JWTError as exc:
        raise AuthenticationError("Invalid token", details=str(exc), status_code=403) from exc

    if not payload.get(USER_ID_CLAIM):
        raise AuthenticationError("No user in token", status_code=403)
    return payload
