import hmac
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

import jwt

from autoreorder.config import settings
from autoreorder.core.exceptions import AuthenticationException


def create_access_token(
    subject: str,
    roles: Iterable[str],
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": subject,
        "roles": list(roles),
        "type": "access",
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationException("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationException("Invalid authentication token")

    if payload.get("type") != "access" or not payload.get("sub"):
        raise AuthenticationException("Invalid authentication token")
    return payload


def is_scheduler_token(token: str) -> bool:
    """True when ``token`` is the shared credential used by the recurring timer."""
    expected = settings.REORDER_SCHEDULER_TOKEN
    if not expected:
        return False
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))
