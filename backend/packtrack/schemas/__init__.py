from .shipment import (
    ShipmentData,
    ShipmentCreate,
    ShipmentUpdate,
    AddParcelForm,
    PickupLocation,
    ShipmentOverview,
)
from .integration import IntegrationResponse, IntegrationOverview, SyncStatus, SyncSummary
from .auth import Credentials, MagicLinkRequest, SessionResponse

__all__ = [
    "ShipmentData",
    "ShipmentCreate",
    "ShipmentUpdate",
    "AddParcelForm",
    "PickupLocation",
    "ShipmentOverview",
    "IntegrationResponse",
    "IntegrationOverview",
    "SyncStatus",
    "SyncSummary",
    "Credentials",
    "MagicLinkRequest",
    "SessionResponse",
]
