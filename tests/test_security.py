import asyncio
from datetime import timedelta

import pytest

from conftest import make_settings
from plantpal.modules.user_management.domain.models.user import FederatedProfile
from plantpal.modules.user_management.domain.services.auth_service import AuthService
from plantpal.modules.user_management.infrastructure.memory import InMemoryUserRepository
from plantpal.shared.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    InvalidTokenError,
    ValidationError,
)
from plantpal.shared.core.security import OAUTH_STATE_TOKEN_TYPE, SecurityManager


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def security():
    return SecurityManager(make_settings())


@pytest.fixture
def auth(security):
    return AuthService(InMemoryUserRepository(), security)


# =============================================================================
# SECURITY MANAGER
# =============================================================================

def test_password_hash_round_trip(security):
    hashed = security.get_password_hash("secret123")

    assert hashed != "secret123"
    assert security.verify_password("secret123", hashed)
    assert not security.verify_password("wrong-password", hashed)
    assert not security.verify_password("secret123", None)


def test_access_token_round_trip(security):
    token = security.create_access_token({"sub": "user-1", "email": "a@example.com", "role": "admin"})
    claims = security.decode_access_token(token)

    assert claims.user_id == "user-1"
    assert claims.email == "a@example.com"
    assert claims.role == "admin"
    assert claims.expires_at is not None


def test_tampered_token_rejected(security):
    token = security.create_access_token({"sub": "user-1"})
    head, payload, signature = token.split(".")
    tampered = ".".join([head, payload, signature[::-1]])

    with pytest.raises(InvalidTokenError):
        security.decode_access_token(tampered)


def test_token_signed_with_other_secret_rejected(security):
    foreign = SecurityManager(make_settings(JWT_SECRET_KEY="another-secret-key")).create_access_token({"sub": "u"})
    with pytest.raises(InvalidTokenError):
        security.decode_access_token(foreign)


def test_expired_token_rejected(security):
    token = security.create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidTokenError):
        security.decode_access_token(token)


def test_oauth_state_is_not_an_access_token(security):
    state = security.create_oauth_state("google")

    assert security.verify_token(state, OAUTH_STATE_TOKEN_TYPE)["sub"] == "google"
    with pytest.raises(InvalidTokenError):
        security.decode_access_token(state)


def test_oauth_state_bound_to_provider(security):
    state = security.create_oauth_state("google")

    assert security.verify_oauth_state(state, "google")
    assert not security.verify_oauth_state(state, "facebook")
    assert not security.verify_oauth_state("garbage", "google")


# =============================================================================
# AUTH SERVICE
# =============================================================================

def test_register_then_authenticate(auth):
    user = run(auth.register("gardener", "Gardener@Example.com", "secret123"))

    assert user.email == "gardener@example.com"
    assert user.password_hash and user.password_hash != "secret123"

    authenticated, token = run(auth.authenticate("gardener@example.com", "secret123"))
    assert authenticated.user_id == user.user_id

    claims, resolved = run(auth.verify(token))
    assert claims.user_id == resolved.user_id == user.user_id


@pytest.mark.parametrize(
    "username, email, password",
    [
        ("ab", "a@example.com", "secret123"),
        ("gardener", "not-an-email", "secret123"),
        ("gardener", "a@example.com", "short"),
        ("gardener", "", "secret123"),
    ],
)
def test_register_validates(auth, username, email, password):
    with pytest.raises(ValidationError):
        run(auth.register(username, email, password))


def test_register_rejects_duplicates(auth):
    run(auth.register("gardener", "gardener@example.com", "secret123"))

    with pytest.raises(DuplicateResourceError):
        run(auth.register("someone", "GARDENER@example.com", "secret123"))
    with pytest.raises(DuplicateResourceError):
        run(auth.register("gardener", "other@example.com", "secret123"))


@pytest.mark.parametrize("email, password", [("gardener@example.com", "wrong-pass"), ("nobody@example.com", "secret123")])
def test_authenticate_failures_look_alike(auth, email, password):
    run(auth.register("gardener", "gardener@example.com", "secret123"))

    with pytest.raises(AuthenticationError) as exc_info:
        run(auth.authenticate(email, password))
    assert exc_info.value.message == "Invalid email or password"


def test_verify_rejects_token_for_missing_user(auth, security):
    token = security.create_access_token({"sub": "ghost"})
    with pytest.raises(InvalidTokenError):
        run(auth.verify(token))


def test_update_profile_keeps_uniqueness(auth):
    first = run(auth.register("first", "first@example.com", "secret123"))
    run(auth.register("second", "second@example.com", "secret123"))

    with pytest.raises(DuplicateResourceError):
        run(auth.update_profile(first.user_id, username="second"))
    with pytest.raises(DuplicateResourceError):
        run(auth.update_profile(first.user_id, email="second@example.com"))

    updated = run(auth.update_profile(first.user_id, username="renamed"))
    assert updated.username == "renamed"
    assert updated.email == "first@example.com"


def test_federated_login_links_existing_email(auth):
    local = run(auth.register("gardener", "gardener@example.com", "secret123"))
    profile = FederatedProfile(
        provider="google",
        provider_id="g-123",
        email="Gardener@example.com",
        name="Gardener",
        avatar="https://img.example.com/a.png",
    )

    linked = run(auth.upsert_federated(profile))
    assert linked.user_id == local.user_id
    assert linked.federated_ids == {"google": "g-123"}
    assert linked.avatar == "https://img.example.com/a.png"

    # Second login resolves through the stored link
    again = run(auth.upsert_federated(profile))
    assert again.user_id == local.user_id


def test_federated_login_creates_user_with_free_username(auth):
    run(auth.register("Sam_Green", "sam@example.com", "secret123"))
    profile = FederatedProfile(provider="facebook", provider_id="fb-1", email="other@example.com", name="Sam Green")

    user = run(auth.upsert_federated(profile))

    assert user.username == "Sam_Green2"
    assert user.password_hash is None
    assert user.federated_ids == {"facebook": "fb-1"}
    # Federated-only accounts cannot log in with a password
    with pytest.raises(AuthenticationError):
        run(auth.authenticate("other@example.com", ""))


@pytest.mark.parametrize("provider", ["github", "local"])
def test_federated_login_rejects_unsupported_provider(auth, provider):
    local = run(auth.register("gardener", "gardener@example.com", "secret123"))
    profile = FederatedProfile(provider=provider, provider_id="x-1", email="gardener@example.com", name="Gardener")

    with pytest.raises(ValidationError):
        run(auth.upsert_federated(profile))

    # The matching local account was not touched
    assert run(auth.get_profile(local.user_id)).federated_ids == {}
