from .oauth_providers import (
    FacebookOAuthProvider,
    GoogleOAuthProvider,
    OAuthProvider,
    OAuthProviderManager,
)

__all__ = [
    "FacebookOAuthProvider",
    "GoogleOAuthProvider",
    "OAuthProvider",
    "OAuthProviderManager",
]
