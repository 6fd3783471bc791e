from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import auth_headers, make_settings, register
from plantpal.main import create_application
from plantpal.shared.core.rate_limiter import limiter


def test_register_returns_token_and_public_user(client):
    response = register(client, "gardener", "Gardener@Example.com")

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["token"]
    user = body["user"]
    assert user["username"] == "gardener"
    assert user["email"] == "gardener@example.com"
    assert user["provider"] == "local"
    assert user["role"] == "user"
    assert user["linkedProviders"] == {}
    assert "passwordHash" not in user and "password_hash" not in user


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"username": "gardener", "email": "g@example.com"}, "All fields are required"),
        ({"username": "ab", "email": "g@example.com", "password": "secret123"}, "Username must be at least 3 characters long"),
        ({"username": "gardener", "email": "g@example.com", "password": "123"}, "Password must be at least 6 characters long"),
        ({"username": "gardener", "email": "nope", "password": "secret123"}, "Please provide a valid email"),
    ],
)
def test_register_validation(client, payload, message):
    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == message
    assert body["code"] == "VALIDATION_ERROR"


def test_register_duplicate(client):
    register(client, "gardener", "gardener@example.com")
    response = register(client, "another", "GARDENER@example.com")

    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_RESOURCE"


def test_login(client):
    register(client, "gardener", "gardener@example.com", "secret123")

    response = client.post("/api/auth/login", json={"email": "gardener@example.com", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["message"] == "Login successful"
    assert response.json()["user"]["username"] == "gardener"

    response = client.post("/api/auth/login", json={"email": "gardener@example.com", "password": "wrong-one"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"

    response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"


def test_profile_verify_and_logout(client):
    headers = auth_headers(client, "gardener")

    profile = client.get("/api/auth/profile", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["user"]["username"] == "gardener"

    verify = client.get("/api/auth/verify", headers=headers)
    assert verify.status_code == 200
    assert verify.json()["user"]["id"] == profile.json()["user"]["id"]

    logout = client.post("/api/auth/logout", headers=headers)
    assert logout.json() == {"success": True, "message": "Logout successful"}

    # Tokens are stateless, so the token still verifies after logout
    assert client.get("/api/auth/verify", headers=headers).status_code == 200


def test_update_profile(client):
    headers = auth_headers(client, "gardener")
    register(client, "taken", "taken@example.com")

    response = client.put("/api/auth/profile", headers=headers, json={"username": "renamed"})
    assert response.status_code == 200
    assert response.json()["message"] == "Profile updated successfully"
    assert response.json()["user"]["username"] == "renamed"
    assert response.json()["user"]["email"] == "gardener@example.com"

    clash = client.put("/api/auth/profile", headers=headers, json={"email": "taken@example.com"})
    assert clash.status_code == 400


def test_missing_token_is_401(client):
    response = client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json() == {"error": "Access token required", "code": "AUTHENTICATION_ERROR"}


def test_invalid_token_is_403(client):
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 403
    assert response.json()["error"] == "Invalid or expired token"


def test_token_from_other_secret_is_403(client):
    foreign = create_application(make_settings(JWT_SECRET_KEY="some-other-secret"))
    with TestClient(foreign) as other_client:
        token = register(other_client, "gardener").json()["token"]

    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


# =============================================================================
# OAUTH
# =============================================================================

def test_unconfigured_oauth_provider_is_404(client):
    assert client.get("/api/auth/google", follow_redirects=False).status_code == 404
    assert client.get("/api/auth/myspace", follow_redirects=False).status_code == 404


def google_transport(seen):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.host == "oauth2.googleapis.com":
            return httpx.Response(200, json={"access_token": "google-access-token", "token_type": "Bearer"})
        if request.url.host == "www.googleapis.com":
            assert request.headers["Authorization"] == "Bearer google-access-token"
            return httpx.Response(200, json={
                "id": "google-42",
                "email": "leaf@example.com",
                "name": "Leaf Lover",
                "picture": "https://img.example.com/leaf.png",
            })
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
def oauth_client(upload_dir, classifier, augmenter):
    seen = []
    settings = make_settings(
        UPLOAD_DIR=str(upload_dir),
        GOOGLE_CLIENT_ID="google-client",
        GOOGLE_CLIENT_SECRET="google-secret",
    )
    app = create_application(settings, augmenter=augmenter, classifier=classifier, http_transport=google_transport(seen))
    with TestClient(app) as test_client:
        yield test_client, seen


def test_google_sign_in_flow(oauth_client):
    client, seen = oauth_client

    start = client.get("/api/auth/google", follow_redirects=False)
    assert start.status_code == 307
    consent = urlparse(start.headers["location"])
    assert consent.netloc == "accounts.google.com"
    params = parse_qs(consent.query)
    assert params["client_id"] == ["google-client"]
    state = params["state"][0]

    callback = client.get(
        "/api/auth/google/callback",
        params={"code": "auth-code", "state": state},
        follow_redirects=False,
    )
    assert callback.status_code == 307
    target = urlparse(callback.headers["location"])
    assert f"{target.scheme}://{target.netloc}{target.path}" == "http://frontend.test/auth-callback"
    query = parse_qs(target.query)
    assert query["provider"] == ["google"]

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {query['token'][0]}"})
    user = profile.json()["user"]
    assert user["email"] == "leaf@example.com"
    assert user["provider"] == "google"
    assert user["linkedProviders"] == {"google": "google-42"}
    assert user["avatar"] == "https://img.example.com/leaf.png"
    assert [request.url.host for request in seen] == ["oauth2.googleapis.com", "www.googleapis.com"]


def test_google_sign_in_links_existing_account(oauth_client):
    client, _ = oauth_client
    local_id = register(client, "leafy", "leaf@example.com").json()["user"]["id"]

    state = parse_qs(urlparse(client.get("/api/auth/google", follow_redirects=False).headers["location"]).query)["state"][0]
    callback = client.get("/api/auth/google/callback", params={"code": "c", "state": state}, follow_redirects=False)
    token = parse_qs(urlparse(callback.headers["location"]).query)["token"][0]

    user = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"}).json()["user"]
    assert user["id"] == local_id
    assert user["linkedProviders"] == {"google": "google-42"}


@pytest.mark.parametrize(
    "params",
    [
        {"code": "auth-code", "state": "forged-state"},
        {"state": "whatever"},
        {"error": "access_denied"},
    ],
)
def test_google_callback_failures_redirect_to_error_page(oauth_client, params):
    client, seen = oauth_client

    callback = client.get("/api/auth/google/callback", params=params, follow_redirects=False)

    assert callback.status_code == 307
    assert callback.headers["location"] == "http://frontend.test/auth-error"
    assert seen == []


def test_google_state_for_other_provider_rejected(oauth_client):
    client, _ = oauth_client
    state = client.app.state.container.security.create_oauth_state("facebook")

    callback = client.get("/api/auth/google/callback", params={"code": "c", "state": state}, follow_redirects=False)
    assert callback.headers["location"] == "http://frontend.test/auth-error"


# =============================================================================
# RATE LIMITING
# =============================================================================

def test_register_rate_limit(upload_dir, classifier, augmenter):
    app = create_application(
        make_settings(UPLOAD_DIR=str(upload_dir), RATE_LIMIT_ENABLED=True),
        augmenter=augmenter,
        classifier=classifier,
    )
    try:
        with TestClient(app) as client:
            statuses = [register(client, f"gardener{i}").status_code for i in range(6)]
            assert statuses == [201] * 5 + [429]
            assert register(client, "gardener9").json()["code"] == "RATE_LIMIT_EXCEEDED"
    finally:
        limiter.reset()
        limiter.enabled = False
