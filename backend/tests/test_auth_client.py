# tests/test_auth_client.py
import json

import httpx
import pytest

from packtrack.services.auth_client import AuthClient
from packtrack.services.errors import AuthError

SESSION = {
    "access_token": "token-123",
    "refresh_token": "refresh-123",
    "expires_in": 3600,
    "user": {"id": "owner-1", "email": "sam@example.com"},
}


def _client(handler) -> AuthClient:
    return AuthClient("https://auth.example.com/", "anon-key", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_password_sign_in():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["apikey"] = request.headers["apikey"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=SESSION)

    client = _client(handler)
    session = await client.sign_in_with_password("sam@example.com", "secret")
    await client.aclose()

    assert seen["url"] == "https://auth.example.com/auth/v1/token?grant_type=password"
    assert seen["apikey"] == "anon-key"
    assert seen["body"] == {"email": "sam@example.com", "password": "secret"}
    assert session.access_token == "token-123"
    assert session.user.id == "owner-1"


@pytest.mark.asyncio
async def test_rejected_credentials_carry_message():
    def handler(request):
        return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})

    client = _client(handler)
    with pytest.raises(AuthError) as exc:
        await client.sign_in_with_password("sam@example.com", "wrong")
    await client.aclose()

    assert exc.value.message == "Invalid login credentials"
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_sign_up_pending_confirmation():
    def handler(request):
        assert request.url.params["redirect_to"] == "http://testserver/auth/callback"
        return httpx.Response(200, json={"id": "owner-9", "email": "new@example.com"})

    client = _client(handler)
    session = await client.sign_up("new@example.com", "secret", redirect_to="http://testserver/auth/callback")
    await client.aclose()

    assert session is None


@pytest.mark.asyncio
async def test_magic_link_creates_user():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    client = _client(handler)
    await client.send_magic_link("sam@example.com")
    await client.aclose()

    assert bodies == [{"email": "sam@example.com", "create_user": True}]


@pytest.mark.asyncio
async def test_code_exchange_and_otp_verification():
    def handler(request):
        if request.url.path == "/auth/v1/token":
            assert request.url.params["grant_type"] == "pkce"
            assert json.loads(request.content) == {"auth_code": "abc"}
        else:
            assert request.url.path == "/auth/v1/verify"
            assert json.loads(request.content) == {"token_hash": "hash", "type": "email"}
        return httpx.Response(200, json=SESSION)

    client = _client(handler)
    assert (await client.exchange_code_for_session("abc")).user.id == "owner-1"
    assert (await client.verify_otp("hash", "email")).access_token == "token-123"
    await client.aclose()


@pytest.mark.asyncio
async def test_get_user_sends_bearer_token():
    def handler(request):
        if request.headers.get("Authorization") != "Bearer token-123":
            return httpx.Response(401, json={"msg": "invalid JWT"})
        return httpx.Response(200, json=SESSION["user"])

    client = _client(handler)
    user = await client.get_user("token-123")
    with pytest.raises(AuthError) as exc:
        await client.get_user("expired")
    await client.aclose()

    assert user.email == "sam@example.com"
    assert exc.value.status_code == 401
    assert exc.value.message == "invalid JWT"


@pytest.mark.asyncio
async def test_unreachable_service():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(AuthError) as exc:
        await client.sign_out("token-123")
    await client.aclose()

    assert exc.value.status_code == 503
