# 📄 File: plantpal/modules/user_management/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for signing up, logging in, logging out, checking a login
# and editing a profile, plus "Sign in with Google/Facebook".
#
# 🧪 Purpose (Technical Summary):
# FastAPI authentication endpoints over AuthService and OAuthProviderManager:
# JWT issuance, bearer-token profile access, rate-limited credential endpoints
# and the OAuth authorization-code redirect/callback pair.
#
# 🔗 Dependencies:
# - FastAPI router, RedirectResponse
# - slowapi limiter (plantpal.shared.core.rate_limiter)
# - plantpal.shared.core.dependencies (container and current user)
# - auth request/response schemas
#
# 🔄 Connected Modules / Calls From:
# - plantpal.api.router (mounted under /api/auth)
# - Frontend applications and OAuth provider redirects

"""
Authentication API Endpoints

Endpoints:
- POST /register: Local account creation (rate limited)
- POST /login: Email/password authentication (rate limited)
- POST /logout: Client-side logout acknowledgement
- GET /profile, PUT /profile: Own profile
- GET /verify: Token validation
- GET /{provider}: Redirect to the provider's consent page
- GET /{provider}/callback: Complete OAuth and redirect to the frontend

Tokens are stateless, so logout only tells the client to discard its token.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from plantpal.modules.user_management.domain.models.user import User
from plantpal.shared.core.dependencies import get_container, get_current_user
from plantpal.shared.core.exceptions import NotFoundError, PlantPalException, ValidationError
from plantpal.shared.core.rate_limiter import LOGIN_RATE_LIMIT, REGISTER_RATE_LIMIT, limiter
from plantpal.shared.core.schemas import MessageResponse

from ..schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
)

logger = logging.getLogger(__name__)

auth_router = APIRouter()


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


@auth_router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account",
    responses={
        400: {"description": "Invalid registration data or user already exists"},
        429: {"description": "Too many registration attempts"},
    },
)
@limiter.limit(REGISTER_RATE_LIMIT)
async def register(request: Request, payload: RegisterRequest) -> AuthResponse:
    """
    Create a local account and sign it in.

    Raises:
        ValidationError: For a short username or password, or a malformed email
        DuplicateResourceError: If the email or username is already taken
    """
    if not payload.username or not payload.email or not payload.password:
        raise ValidationError("All fields are required")

    auth_service = get_container(request).auth_service
    user = await auth_service.register(payload.username, payload.email, payload.password)
    token = auth_service.issue_token(user)

    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserResponse.from_domain(user),
    )


@auth_router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    responses={
        401: {"description": "Invalid email or password"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(request: Request, payload: LoginRequest) -> AuthResponse:
    auth_service = get_container(request).auth_service
    user, token = await auth_service.authenticate(
        payload.email or "",
        payload.password or "",
        ip_address=_client_ip(request),
    )
    return AuthResponse(message="Login successful", token=token, user=UserResponse.from_domain(user))


@auth_router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(current_user: User = Depends(get_current_user)) -> MessageResponse:
    logger.info(f"User {current_user.user_id} logged out")
    return MessageResponse(message="Logout successful")


@auth_router.get("/profile", response_model=UserEnvelope, summary="Get own profile")
async def get_profile(request: Request, current_user: User = Depends(get_current_user)) -> UserEnvelope:
    user = await get_container(request).auth_service.get_profile(current_user.user_id)
    return UserEnvelope(user=UserResponse.from_domain(user))


@auth_router.put(
    "/profile",
    response_model=ProfileUpdateResponse,
    summary="Update own profile",
    responses={400: {"description": "Invalid value or already in use"}},
)
async def update_profile(
    request: Request,
    payload: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
) -> ProfileUpdateResponse:
    user = await get_container(request).auth_service.update_profile(
        current_user.user_id,
        username=payload.username,
        email=payload.email,
    )
    return ProfileUpdateResponse(user=UserResponse.from_domain(user))


@auth_router.get("/verify", response_model=UserEnvelope, summary="Validate the bearer token")
async def verify_token(current_user: User = Depends(get_current_user)) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.from_domain(current_user))


# =============================================================================
# OAUTH
# =============================================================================

@auth_router.get(
    "/{provider}",
    summary="Start OAuth sign-in",
    responses={
        307: {"description": "Redirect to the provider's consent page"},
        404: {"description": "Provider unknown or not configured"},
    },
)
async def oauth_start(request: Request, provider: str) -> RedirectResponse:
    container = get_container(request)
    oauth_provider = container.oauth_manager.get_provider(provider)
    if oauth_provider is None:
        raise NotFoundError("OAuth provider not available", resource_type="oauth_provider", resource_id=provider)

    state = container.security.create_oauth_state(oauth_provider.name)
    return RedirectResponse(oauth_provider.get_authorization_url(state))


@auth_router.get(
    "/{provider}/callback",
    summary="Complete OAuth sign-in",
    responses={307: {"description": "Redirect to the frontend with a token or to the error page"}},
)
async def oauth_callback(
    request: Request,
    provider: str,
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
) -> RedirectResponse:
    """
    Finish the authorization-code flow.

    Every failure (provider error, bad state, failed exchange) lands on the
    frontend's /auth-error page rather than an error envelope.
    """
    container = get_container(request)
    frontend_url = container.settings.FRONTEND_URL.rstrip("/")
    error_redirect = RedirectResponse(f"{frontend_url}/auth-error")

    oauth_provider = container.oauth_manager.get_provider(provider)
    if oauth_provider is None:
        raise NotFoundError("OAuth provider not available", resource_type="oauth_provider", resource_id=provider)

    if error or not code:
        logger.warning(f"{provider} OAuth callback without code: {error or 'missing code'}")
        return error_redirect
    if not state or not container.security.verify_oauth_state(state, oauth_provider.name):
        logger.warning(f"{provider} OAuth callback with invalid state from {_client_ip(request)}")
        return error_redirect

    try:
        profile = await container.oauth_manager.handle_oauth_callback(oauth_provider, code)
        user = await container.auth_service.upsert_federated(profile)
    except PlantPalException as e:
        logger.error(f"{provider} OAuth callback failed: {e.message}")
        return error_redirect

    token = container.auth_service.issue_token(user)
    query = urlencode({"token": token, "provider": oauth_provider.name})
    return RedirectResponse(f"{frontend_url}/auth-callback?{query}")
