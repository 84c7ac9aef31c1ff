"""
Authentication endpoints. Everything is delegated to the hosted auth service;
PackTrack keeps the access token in a cookie and reads the owner id from it.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Cookie, Depends, Header, HTTPException, Request, Response
from fastapi.responses import RedirectResponse
from packtrack.api.deps import SESSION_COOKIE, extract_token, get_auth_client
from packtrack.schemas.auth import Credentials, MagicLinkRequest, SessionResponse
from packtrack.services.auth_client import AuthClient, AuthSession
from packtrack.services.errors import AuthError

logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_PATH = "/auth/error"


def _safe_next(next_path: Optional[str]) -> str:
    # Only same-origin relative paths; "//host" would leave the site
    if not next_path or not next_path.startswith("/") or next_path.startswith("//"):
        return "/"
    return next_path


def _set_session_cookie(response: Response, session: AuthSession) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        session.access_token,
        max_age=session.expires_in,
        httponly=True,
        samesite="lax",
    )


def _session_response(response: Response, session: AuthSession, message: Optional[str] = None) -> SessionResponse:
    _set_session_cookie(response, session)
    return SessionResponse(
        authenticated=True,
        owner_id=session.user.id,
        email=session.user.email,
        access_token=session.access_token,
        message=message,
    )


@router.post("/login", response_model=SessionResponse)
async def login(
    credentials: Credentials,
    response: Response,
    auth: AuthClient = Depends(get_auth_client)
):
    try:
        session = await auth.sign_in_with_password(credentials.email, credentials.password)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    logger.info(f"User {session.user.id} signed in")
    return _session_response(response, session)


@router.post("/signup", response_model=SessionResponse)
async def signup(
    credentials: Credentials,
    request: Request,
    response: Response,
    auth: AuthClient = Depends(get_auth_client)
):
    """Create an account. When e-mail confirmation is required no session is returned yet."""
    try:
        session = await auth.sign_up(
            credentials.email,
            credentials.password,
            redirect_to=str(request.url_for("auth_callback")),
        )
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if session is None:
        return SessionResponse(
            authenticated=False,
            email=credentials.email,
            message="Check your inbox to confirm your account",
        )
    return _session_response(response, session, message="Account created")


@router.post("/magic-link", response_model=SessionResponse)
async def magic_link(
    payload: MagicLinkRequest,
    request: Request,
    auth: AuthClient = Depends(get_auth_client)
):
    try:
        await auth.send_magic_link(payload.email, redirect_to=str(request.url_for("auth_callback")))
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return SessionResponse(
        authenticated=False,
        email=payload.email,
        message="Check your inbox for the sign-in link",
    )


@router.post("/logout", response_model=SessionResponse)
async def logout(
    response: Response,
    authorization: Optional[str] = Header(None),
    session_token: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    auth: AuthClient = Depends(get_auth_client)
):
    token = extract_token(authorization, session_token)
    if token:
        try:
            await auth.sign_out(token)
        except AuthError as e:
            # The local session is dropped either way
            logger.warning(f"Sign-out at the auth service failed: {e.message}")
    response.delete_cookie(SESSION_COOKIE)
    return SessionResponse(authenticated=False)


@router.get("/session", response_model=SessionResponse)
async def get_session(
    authorization: Optional[str] = Header(None),
    session_token: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    auth: AuthClient = Depends(get_auth_client)
):
    """Whether the caller is signed in, and as whom."""
    token = extract_token(authorization, session_token)
    if not token:
        return SessionResponse(authenticated=False)
    try:
        user = await auth.get_user(token)
    except AuthError as e:
        if e.status_code == 401:
            return SessionResponse(authenticated=False)
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return SessionResponse(authenticated=True, owner_id=user.id, email=user.email)


@router.get("/callback", name="auth_callback")
async def auth_callback(
    code: Optional[str] = None,
    token_hash: Optional[str] = None,
    type: Optional[str] = None,
    next: Optional[str] = None,
    auth: AuthClient = Depends(get_auth_client)
):
    """
    Landing point of e-mail links and OAuth redirects.

    Accepts an authorization code or a token hash with its type. On success the
    session cookie is set and the browser goes to `next`; otherwise to the error page.
    """
    session = None
    if code:
        try:
            session = await auth.exchange_code_for_session(code)
        except AuthError as e:
            logger.warning(f"Code exchange failed: {e.message}")

    if session is None and token_hash and type:
        try:
            session = await auth.verify_otp(token_hash, type)
        except AuthError as e:
            logger.warning(f"Token verification failed: {e.message}")

    if session is None:
        return RedirectResponse(ERROR_PATH, status_code=303)

    response = RedirectResponse(_safe_next(next), status_code=303)
    _set_session_cookie(response, session)
    return response


@router.get("/error")
async def auth_error():
    return {
        "message": "Something went wrong while signing in. Please try again.",
        "home": "/",
    }
