"""
Shared API dependencies: the signed-in owner and the per-request state controller.
"""
from typing import Optional

from fastapi import Cookie, Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from packtrack.db.database import get_db
from packtrack.services.auth_client import AuthClient
from packtrack.services.errors import AuthError
from packtrack.services.integration_sync import SyncRegistry
from packtrack.services.shipment_state import ShipmentStateController
from packtrack.services.shipment_store import ShipmentStore

SESSION_COOKIE = "packtrack-access-token"


def get_auth_client(request: Request) -> AuthClient:
    return request.app.state.auth_client


def get_sync_registry(request: Request) -> SyncRegistry:
    return request.app.state.sync_registry


def extract_token(authorization: Optional[str], cookie_token: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return cookie_token


async def get_current_owner(
    authorization: Optional[str] = Header(None),
    session_token: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    auth: AuthClient = Depends(get_auth_client),
) -> str:
    """Owner id of the signed-in user; 401 when there is no valid session."""
    token = extract_token(authorization, session_token)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        user = await auth.get_user(token)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return user.id


def get_controller(
    owner_id: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    """State controller bound to the owner for the duration of the request."""
    controller = ShipmentStateController(ShipmentStore(db), owner_id)
    controller.load()
    try:
        yield controller
    finally:
        controller.close()
