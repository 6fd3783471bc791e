# 📄 File: plantpal/shared/core/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Small helpers every endpoint can ask for: "who is calling?" and "where are the
# app's services?"
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies resolving the per-application ServiceContainer and the
# bearer-token user (required and optional variants).
# 🔗 Dependencies:
# FastAPI security (HTTPBearer), AuthService, logging context helpers
# 🔄 Connected Modules / Calls From:
# Every module's API routers

"""
Common FastAPI dependencies.

A missing bearer token is a 401; a token that is present but invalid,
expired, or names a deleted user is a 403.
"""

import logging
from typing import TYPE_CHECKING, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from plantpal.modules.user_management.domain.models.user import User
from plantpal.shared.utils.logging import bind_user, get_logger

from .exceptions import AuthenticationError, InvalidTokenError

if TYPE_CHECKING:
    from plantpal.shared.infrastructure.container import ServiceContainer

logger = logging.getLogger(__name__)
security_logger = get_logger(__name__).security

# auto_error=False so a missing header reaches our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> "ServiceContainer":
    """Return the ServiceContainer owned by the running application."""
    return request.app.state.container


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """
    Resolve the authenticated user from the Authorization header.

    Raises:
        AuthenticationError: If no bearer token was sent
        InvalidTokenError: If the token cannot be verified
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")

    container = get_container(request)
    try:
        _, user = await container.auth_service.verify(credentials.credentials)
    except InvalidTokenError:
        security_logger.log_authentication(
            subject="<token>",
            event_type="token_verification",
            success=False,
            ip_address=request.client.host if request.client else None,
        )
        raise

    request.state.user_id = user.user_id
    bind_user(user.user_id)
    return user


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[User]:
    """Like get_current_user, but anonymous or invalid tokens yield None."""
    if credentials is None or not credentials.credentials:
        return None

    container = get_container(request)
    try:
        _, user = await container.auth_service.verify(credentials.credentials)
    except InvalidTokenError:
        logger.debug("Ignoring invalid token on optional-auth route")
        return None

    request.state.user_id = user.user_id
    bind_user(user.user_id)
    return user
