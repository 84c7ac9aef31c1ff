"""
Client for the hosted auth service (Supabase GoTrue REST API).

Sign-in, sign-up, magic links and the callback exchange are all delegated;
PackTrack only needs to know whether a token belongs to a user and which one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from packtrack.services.errors import AuthError

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    id: str
    email: Optional[str] = None


@dataclass
class AuthSession:
    access_token: str
    refresh_token: Optional[str]
    expires_in: Optional[int]
    user: AuthUser


def _parse_user(data: Dict[str, Any]) -> AuthUser:
    return AuthUser(id=str(data["id"]), email=data.get("email"))


def _parse_session(data: Dict[str, Any]) -> Optional[AuthSession]:
    if not data.get("access_token"):
        return None
    return AuthSession(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        expires_in=data.get("expires_in"),
        user=_parse_user(data["user"]),
    )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Authentication failed ({response.status_code})"
    for key in ("error_description", "msg", "message", "error"):
        if body.get(key):
            return str(body[key])
    return f"Authentication failed ({response.status_code})"


class AuthClient:
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/auth/v1",
            headers={"apikey": anon_key},
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self._client.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Auth service request %s %s failed: %s", method, path, e)
            raise AuthError("Authentication service is unavailable", 503) from e

        if response.status_code >= 400:
            status_code = 401 if response.status_code in (401, 403) else 400
            raise AuthError(_error_message(response), status_code)
        if not response.content:
            return {}
        return response.json()

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        data = await self._request(
            "POST", "/token", params={"grant_type": "password"}, json={"email": email, "password": password}
        )
        session = _parse_session(data)
        if session is None:
            raise AuthError("Sign-in did not return a session")
        return session

    async def sign_up(self, email: str, password: str, redirect_to: Optional[str] = None) -> Optional[AuthSession]:
        """Returns a session when the account is usable right away, None when e-mail confirmation is pending."""
        params = {"redirect_to": redirect_to} if redirect_to else None
        data = await self._request("POST", "/signup", params=params, json={"email": email, "password": password})
        return _parse_session(data)

    async def send_magic_link(self, email: str, redirect_to: Optional[str] = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        await self._request("POST", "/otp", params=params, json={"email": email, "create_user": True})

    async def exchange_code_for_session(self, code: str, code_verifier: Optional[str] = None) -> AuthSession:
        payload = {"auth_code": code}
        if code_verifier:
            payload["code_verifier"] = code_verifier
        session = _parse_session(await self._request("POST", "/token", params={"grant_type": "pkce"}, json=payload))
        if session is None:
            raise AuthError("Code exchange did not return a session")
        return session

    async def verify_otp(self, token_hash: str, otp_type: str) -> AuthSession:
        session = _parse_session(
            await self._request("POST", "/verify", json={"token_hash": token_hash, "type": otp_type})
        )
        if session is None:
            raise AuthError("Verification did not return a session")
        return session

    async def get_user(self, access_token: str) -> AuthUser:
        return _parse_user(await self._request("GET", "/user", token=access_token))

    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/logout", token=access_token)
