"""
FastAPI dependencies for authentication and role checks.

Every reorder trigger requires a bearer credential. The recurring timer
presents the shared scheduler token; operators present a signed JWT.
"""
from typing import List, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from autoreorder.core.exceptions import (
    AuthenticationException,
    AuthorizationException,
    to_http_exception,
)
from autoreorder.schemas.auth import Principal, SCHEDULER_ROLE
from autoreorder.utils.security import decode_access_token, is_scheduler_token


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise to_http_exception(AuthenticationException("Bearer credentials are required"))

    token = credentials.credentials
    if is_scheduler_token(token):
        return Principal(subject="scheduler", roles=[SCHEDULER_ROLE])

    try:
        payload = decode_access_token(token)
    except AuthenticationException as exc:
        raise to_http_exception(exc)
    return Principal(subject=str(payload["sub"]), roles=list(payload.get("roles") or []))


def require_roles(roles: List[str]):
    allowed = set(roles)

    def _check(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not allowed.intersection(principal.roles):
            raise to_http_exception(
                AuthorizationException(f"Requires one of roles: {', '.join(sorted(allowed))}")
            )
        return principal

    return _check
