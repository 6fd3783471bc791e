# 📄 File: plantpal/modules/user_management/infrastructure/external/oauth_providers.py
# 🧭 Purpose (Layman Explanation):
# Manages sign-in with Google and Facebook accounts, so people can join PlantPal
# without creating a new password.
#
# 🧪 Purpose (Technical Summary):
# OAuth 2.0 authorization-code flow for Google and Facebook over httpx: consent URL
# generation, code exchange, profile retrieval and normalization to FederatedProfile.
#
# 🔗 Dependencies:
# - httpx (async HTTP client)
# - plantpal.shared.config.settings (OAuth client configuration)
# - plantpal.modules.user_management.domain.models (FederatedProfile)
#
# 🔄 Connected Modules / Calls From:
# - Auth API endpoints (/api/auth/{provider}, /api/auth/{provider}/callback)
# - plantpal.shared.infrastructure.container (construction)

"""
OAuth Providers Service

Supported Providers:
- Google OAuth 2.0
- Facebook Login

Only providers with a configured client id are registered.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from plantpal.shared.config.settings import Settings
from plantpal.shared.core.exceptions import ExternalServiceError

from ...domain.models.user import FederatedProfile

logger = logging.getLogger(__name__)

OAUTH_HTTP_TIMEOUT_SECONDS = 10.0


class OAuthProvider(ABC):
    """Abstract base class for OAuth providers."""

    name: str = ""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=OAUTH_HTTP_TIMEOUT_SECONDS, transport=self._transport)

    @abstractmethod
    def get_authorization_url(self, state: str) -> str:
        """Get the authorization URL for OAuth flow."""
        pass

    @abstractmethod
    async def exchange_code_for_token(self, code: str) -> Dict[str, Any]:
        """Exchange authorization code for access token."""
        pass

    @abstractmethod
    async def get_user_info(self, access_token: str) -> Dict[str, Any]:
        """Get user information using access token."""
        pass

    @abstractmethod
    def normalize_user_data(self, provider_data: Dict[str, Any]) -> FederatedProfile:
        """Normalize provider-specific user data to standard format."""
        pass

    async def _request_json(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{self.name} OAuth request failed with {e.response.status_code}")
            raise ExternalServiceError(
                f"{self.name} OAuth request failed",
                service=self.name,
                service_response=e.response.text,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{self.name} OAuth request error: {e}")
            raise ExternalServiceError(f"{self.name} OAuth request failed", service=self.name)


class GoogleOAuthProvider(OAuthProvider):
    """
    Google OAuth 2.0 provider implementation.
    """

    name = "google"
    auth_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://www.googleapis.com/oauth2/v2/userinfo"
    scopes = ["openid", "email", "profile"]

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(transport)
        self.client_id = settings.GOOGLE_CLIENT_ID
        self.client_secret = settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = settings.GOOGLE_REDIRECT_URI

    def get_authorization_url(self, state: str) -> str:
        """
        Generate Google OAuth authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            str: Authorization URL for Google OAuth
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(self.scopes),
            "response_type": "code",
            "state": state,
            "prompt": "select_account",
        }
        return f"{self.auth_url}?{urlencode(params)}"

    async def exchange_code_for_token(self, code: str) -> Dict[str, Any]:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
        }
        return await self._request_json("POST", self.token_url, data=data)

    async def get_user_info(self, access_token: str) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {access_token}"}
        return await self._request_json("GET", self.user_info_url, headers=headers)

    def normalize_user_data(self, provider_data: Dict[str, Any]) -> FederatedProfile:
        """
        Normalize Google user data to standard format.

        Args:
            provider_data: Raw user data from Google

        Returns:
            FederatedProfile: Normalized user data
        """
        return FederatedProfile(
            provider=self.name,
            provider_id=str(provider_data.get("id") or provider_data.get("sub") or ""),
            email=provider_data.get("email"),
            name=provider_data.get("name"),
            avatar=provider_data.get("picture"),
        )


class FacebookOAuthProvider(OAuthProvider):
    """
    Facebook Login provider implementation (Graph API).
    """

    name = "facebook"
    auth_url = "https://www.facebook.com/v18.0/dialog/oauth"
    token_url = "https://graph.facebook.com/v18.0/oauth/access_token"
    user_info_url = "https://graph.facebook.com/me"
    scopes = ["email", "public_profile"]

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(transport)
        self.client_id = settings.FACEBOOK_APP_ID
        self.client_secret = settings.FACEBOOK_APP_SECRET
        self.redirect_uri = settings.FACEBOOK_REDIRECT_URI

    def get_authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": ",".join(self.scopes),
            "response_type": "code",
            "state": state,
        }
        return f"{self.auth_url}?{urlencode(params)}"

    async def exchange_code_for_token(self, code: str) -> Dict[str, Any]:
        params = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }
        return await self._request_json("GET", self.token_url, params=params)

    async def get_user_info(self, access_token: str) -> Dict[str, Any]:
        params = {"fields": "id,name,email,picture", "access_token": access_token}
        return await self._request_json("GET", self.user_info_url, params=params)

    def normalize_user_data(self, provider_data: Dict[str, Any]) -> FederatedProfile:
        picture = provider_data.get("picture") or {}
        return FederatedProfile(
            provider=self.name,
            provider_id=str(provider_data.get("id") or ""),
            email=provider_data.get("email"),
            name=provider_data.get("name"),
            avatar=(picture.get("data") or {}).get("url") if isinstance(picture, dict) else None,
        )


class OAuthProviderManager:
    """
    Manager class for handling multiple OAuth providers.

    Provides a unified interface for working with different OAuth providers.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Register every provider that has a client id configured."""
        self.providers: Dict[str, OAuthProvider] = {}
        if settings.GOOGLE_CLIENT_ID:
            self.providers["google"] = GoogleOAuthProvider(settings, transport)
        if settings.FACEBOOK_APP_ID:
            self.providers["facebook"] = FacebookOAuthProvider(settings, transport)

    def get_provider(self, provider_name: str) -> Optional[OAuthProvider]:
        """
        Get OAuth provider by name.

        Args:
            provider_name: Name of the OAuth provider

        Returns:
            Optional[OAuthProvider]: Provider instance if configured, None otherwise
        """
        provider = self.providers.get(provider_name.lower())
        if not provider:
            logger.warning(f"Unknown or unconfigured OAuth provider: {provider_name}")
        return provider

    async def handle_oauth_callback(self, provider: OAuthProvider, code: str) -> FederatedProfile:
        """
        Exchange the callback code and return the normalized profile.

        Raises:
            ExternalServiceError: If any step of the exchange fails
        """
        token_data = await provider.exchange_code_for_token(code)
        access_token = token_data.get("access_token")
        if not access_token:
            logger.error(f"No access token received from {provider.name}")
            raise ExternalServiceError(f"No access token received from {provider.name}", service=provider.name)

        user_info = await provider.get_user_info(access_token)
        profile = provider.normalize_user_data(user_info)
        if not profile.provider_id:
            raise ExternalServiceError(f"{provider.name} profile has no user id", service=provider.name)

        logger.info(f"Successfully handled OAuth callback for {provider.name}")
        return profile
