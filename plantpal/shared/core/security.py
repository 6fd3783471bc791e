"""
Security utilities for JWT issuance and validation and password hashing.
Provides the token and hashing primitives behind the credential store.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from passlib.context import CryptContext
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

from ..config.settings import Settings
from .exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
OAUTH_STATE_TOKEN_TYPE = "oauth_state"


class TokenClaims(BaseModel):
    """Verified access-token payload."""
    user_id: str
    email: Optional[str] = None
    username: Optional[str] = None
    provider: str = "local"
    role: str = "user"
    expires_at: Optional[datetime] = None


class SecurityManager:
    """
    Centralized security manager for authentication.
    Handles JWT tokens, password hashing, and OAuth state signing.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.algorithm = settings.JWT_ALGORITHM
        self.secret_key = settings.JWT_SECRET_KEY
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        self.oauth_state_expire_minutes = settings.OAUTH_STATE_EXPIRE_MINUTES
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create JWT access token with user data and expiration.

        Args:
            data: Token payload data (must contain ``sub``)
            expires_delta: Custom expiration time

        Returns:
            str: Encoded JWT token
        """
        return self._encode(
            data,
            ACCESS_TOKEN_TYPE,
            expires_delta or timedelta(minutes=self.access_token_expire_minutes),
        )

    def verify_token(self, token: str, token_type: str = ACCESS_TOKEN_TYPE) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify
            token_type: Expected token type

        Returns:
            dict: Decoded token payload

        Raises:
            InvalidTokenError: If token is invalid, expired or of the wrong type
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise InvalidTokenError()
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise InvalidTokenError()

        if payload.get("type") != token_type:
            logger.warning(f"Token type mismatch. Expected: {token_type}, Got: {payload.get('type')}")
            raise InvalidTokenError()

        if payload.get("exp") is None:
            logger.warning("Token missing expiration")
            raise InvalidTokenError()

        if not payload.get("sub"):
            logger.warning("Token missing subject (user_id)")
            raise InvalidTokenError()

        logger.debug(f"Token verified successfully for subject: {payload.get('sub')}")
        return payload

    def decode_access_token(self, token: str) -> TokenClaims:
        """Verify an access token and return its claims."""
        payload = self.verify_token(token, ACCESS_TOKEN_TYPE)
        return TokenClaims(
            user_id=payload["sub"],
            email=payload.get("email"),
            username=payload.get("username"),
            provider=payload.get("provider", "local"),
            role=payload.get("role", "user"),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    def create_oauth_state(self, provider: str) -> str:
        """Create a short-lived signed state value for an OAuth round trip."""
        return self._encode(
            {"sub": provider},
            OAUTH_STATE_TOKEN_TYPE,
            timedelta(minutes=self.oauth_state_expire_minutes),
        )

    def verify_oauth_state(self, state: str, provider: str) -> bool:
        """Check that an OAuth state was issued by us for this provider."""
        try:
            payload = self.verify_token(state, OAUTH_STATE_TOKEN_TYPE)
        except InvalidTokenError:
            return False
        return payload.get("sub") == provider

    def get_password_hash(self, password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            str: Hashed password
        """
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify password against hash.

        Args:
            plain_password: Plain text password
            hashed_password: Stored hashed password (None for federated-only accounts)

        Returns:
            bool: True if password matches
        """
        if not hashed_password:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError as e:
            logger.error(f"Password verification error: {e}")
            return False

    def _encode(self, data: Dict[str, Any], token_type: str, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": now + lifetime,
            "iat": now,
            "type": token_type,
        })
        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"{token_type} token created for subject: {data.get('sub')}")
        return encoded_jwt
