"""
Auth schemas.
"""
from typing import Optional
from packtrack.schemas.shipment import CamelModel


class Credentials(CamelModel):
    email: str
    password: str


class MagicLinkRequest(CamelModel):
    email: str


class SessionResponse(CamelModel):
    authenticated: bool
    owner_id: Optional[str] = None
    email: Optional[str] = None
    access_token: Optional[str] = None
    message: Optional[str] = None
