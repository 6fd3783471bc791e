# 📄 File: plantpal/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Handles signing up, logging in, checking login tokens, editing profiles and
# connecting Google/Facebook accounts to PlantPal users
# 🧪 Purpose (Technical Summary):
# Credential store domain service: registration with uniqueness rules, bcrypt
# password verification, JWT issuance/verification and federated identity upsert
# 🔗 Dependencies:
# Domain models, UserRepository, plantpal.shared.core.security, email_validator
# 🔄 Connected Modules / Calls From:
# Auth API endpoints, authentication dependencies, OAuth callback flow

import logging
import re
from typing import Optional, Tuple

from email_validator import EmailNotValidError, validate_email

from plantpal.shared.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)
from plantpal.shared.core.security import SecurityManager, TokenClaims
from plantpal.shared.utils.logging import get_logger

from ..models.user import AuthProvider, FederatedProfile, User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)
security_logger = get_logger(__name__).security

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
FEDERATED_PROVIDERS = [p.value for p in AuthProvider if p != AuthProvider.LOCAL]


class AuthService:
    """
    Domain service for account and credential management.

    Business rules:
    - Username (>= 3 chars) and email are each unique across all users
    - Passwords (>= 6 chars) are stored only as bcrypt hashes
    - Unknown email, wrong password and password-less accounts all fail
      the same way so callers cannot probe which emails exist
    - Tokens are stateless; there is no revocation list
    """

    def __init__(self, user_repository: UserRepository, security: SecurityManager):
        self.user_repository = user_repository
        self.security = security

    # =========================================================================
    # LOCAL ACCOUNTS
    # =========================================================================

    async def register(self, username: str, email: str, password: str) -> User:
        """
        Create a password-based account.

        Args:
            username: Desired unique username
            email: Unique email address
            password: Plain text password

        Returns:
            The created User

        Raises:
            ValidationError: If any field fails validation
            DuplicateResourceError: If the email or username is already taken
        """
        username = (username or "").strip()
        email = self._normalize_email(email)

        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(
                f"Username must be at least {MIN_USERNAME_LENGTH} characters long",
                field="username",
            )
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                field="password",
            )

        if await self.user_repository.get_by_email(email) or await self.user_repository.get_by_username(username):
            logger.info(f"Registration rejected for duplicate identity: {username} / {email}")
            raise DuplicateResourceError(
                "User with this email or username already exists",
                resource_type="user",
            )

        user = User.create_local_user(
            username=username,
            email=email,
            password_hash=self.security.get_password_hash(password),
        )
        created = await self.user_repository.create(user)
        logger.info(f"User registered: {created.user_id}")
        return created

    async def authenticate(self, email: str, password: str, ip_address: Optional[str] = None) -> Tuple[User, str]:
        """
        Check credentials and issue an access token.

        Returns:
            Tuple of (User, JWT token)

        Raises:
            AuthenticationError: On any credential mismatch
        """
        user = await self.user_repository.get_by_email((email or "").strip().lower()) if email else None

        if user is None or not self.security.verify_password(password or "", user.password_hash):
            security_logger.log_authentication(
                subject=email or "<empty>",
                event_type="login",
                success=False,
                ip_address=ip_address,
            )
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        security_logger.log_authentication(
            subject=user.user_id,
            event_type="login",
            success=True,
            ip_address=ip_address,
        )
        return user, self.issue_token(user)

    def issue_token(self, user: User) -> str:
        """Issue a signed access token for a user."""
        return self.security.create_access_token({
            "sub": user.user_id,
            "email": user.email,
            "username": user.username,
            "provider": user.provider,
            "role": user.role,
        })

    async def verify(self, token: str) -> Tuple[TokenClaims, User]:
        """
        Validate a token and resolve its user.

        Raises:
            InvalidTokenError: If the token is invalid, expired, or its user is gone
        """
        claims = self.security.decode_access_token(token)
        user = await self.user_repository.get_by_id(claims.user_id)
        if user is None:
            logger.warning(f"Token presented for missing user: {claims.user_id}")
            raise InvalidTokenError()
        return claims, user

    # =========================================================================
    # PROFILE
    # =========================================================================

    async def get_profile(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)
        return user

    async def update_profile(
        self,
        user_id: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        Change username and/or email, keeping both unique.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If a new value is malformed
            DuplicateResourceError: If another user already holds the value
        """
        user = await self.get_profile(user_id)

        if username is not None:
            username = username.strip()
            if len(username) < MIN_USERNAME_LENGTH:
                raise ValidationError(
                    f"Username must be at least {MIN_USERNAME_LENGTH} characters long",
                    field="username",
                )
            if username != user.username:
                holder = await self.user_repository.get_by_username(username)
                if holder and holder.user_id != user.user_id:
                    raise DuplicateResourceError("Username already in use", resource_type="user", field="username")
                user.username = username

        if email is not None:
            email = self._normalize_email(email)
            if email != user.email:
                holder = await self.user_repository.get_by_email(email)
                if holder and holder.user_id != user.user_id:
                    raise DuplicateResourceError("Email already in use", resource_type="user", field="email")
                user.email = email

        user.touch()
        updated = await self.user_repository.update(user)
        logger.info(f"Profile updated for user: {user_id}")
        return updated

    # =========================================================================
    # FEDERATED IDENTITIES
    # =========================================================================

    async def find_federated(self, provider: str, provider_id: str) -> Optional[User]:
        return await self.user_repository.get_by_provider_id(provider, provider_id)

    async def upsert_federated(self, profile: FederatedProfile) -> User:
        """
        Resolve the local account for an OAuth profile, creating or linking as needed.

        Resolution order: existing link for (provider, provider_id), then an
        account with the same email (which gets linked), then a new account.
        """
        if profile.provider not in FEDERATED_PROVIDERS:
            raise ValidationError(
                f"Unsupported sign-in provider: {profile.provider}",
                field="provider",
                value=profile.provider,
            )

        existing = await self.find_federated(profile.provider, profile.provider_id)
        if existing:
            return existing

        email = profile.email.strip().lower() if profile.email else None
        if email:
            by_email = await self.user_repository.get_by_email(email)
            if by_email:
                by_email.link_provider(profile.provider, profile.provider_id)
                if not by_email.avatar and profile.avatar:
                    by_email.avatar = profile.avatar
                linked = await self.user_repository.update(by_email)
                logger.info(f"Linked {profile.provider} identity to user: {linked.user_id}")
                return linked

        username = await self._available_username(profile.name or (email.split("@")[0] if email else None))
        user = User.create_federated_user(
            username=username,
            provider=profile.provider,
            provider_id=profile.provider_id,
            email=email,
            avatar=profile.avatar,
        )
        created = await self.user_repository.create(user)
        logger.info(f"Created {profile.provider} user: {created.user_id}")
        return created

    async def _available_username(self, seed: Optional[str]) -> str:
        base = re.sub(r"\s+", "_", (seed or "").strip())[:90] or "gardener"
        if len(base) < MIN_USERNAME_LENGTH:
            base = f"{base}_user"
        candidate = base
        suffix = 1
        while await self.user_repository.get_by_username(candidate):
            suffix += 1
            candidate = f"{base}{suffix}"
        return candidate

    @staticmethod
    def _normalize_email(email: Optional[str]) -> str:
        try:
            result = validate_email((email or "").strip(), check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("Please provide a valid email", field="email")
        return result.normalized.lower()
