"""
Shipment schemas.

Attribute names are snake_case in Python; on the wire every schema speaks the
camelCase shape the dashboard uses (itemName, trackingCode, pickupLocation...).
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import date
from typing import Optional, List
from packtrack.models.shipment import ShipmentStatus, ShipmentDirection, Carrier


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PickupLocation(CamelModel):
    name: str
    address: str
    city: str
    postal_code: str
    opening_hours: str
    pin_code: str  # Shown as a scannable placeholder at the counter
    lat: float
    lng: float


class ShipmentData(CamelModel):
    id: str
    item_name: str
    image: str
    status: ShipmentStatus
    direction: ShipmentDirection = ShipmentDirection.INCOMING
    carrier: Carrier
    tracking_code: str
    last_update: str
    pickup_location: Optional[PickupLocation] = None
    receipt_image: Optional[str] = None
    packaging_photo: Optional[str] = None
    packing_note: Optional[str] = None
    shipping_deadline: Optional[date] = None
    archived: bool = False


class ShipmentCreate(CamelModel):
    """A shipment before the server assigned it an id."""
    item_name: str
    image: Optional[str] = None
    status: ShipmentStatus
    direction: Optional[ShipmentDirection] = None
    carrier: Carrier
    tracking_code: str
    last_update: Optional[str] = None
    pickup_location: Optional[PickupLocation] = None
    receipt_image: Optional[str] = None
    packaging_photo: Optional[str] = None
    packing_note: Optional[str] = None
    shipping_deadline: Optional[date] = None
    archived: Optional[bool] = None


class ShipmentUpdate(CamelModel):
    """Partial update; only fields sent by the client are applied."""
    item_name: Optional[str] = None
    image: Optional[str] = None
    status: Optional[ShipmentStatus] = None
    direction: Optional[ShipmentDirection] = None
    carrier: Optional[Carrier] = None
    tracking_code: Optional[str] = None
    last_update: Optional[str] = None
    pickup_location: Optional[PickupLocation] = None
    receipt_image: Optional[str] = None
    packaging_photo: Optional[str] = None
    packing_note: Optional[str] = None
    shipping_deadline: Optional[date] = None
    archived: Optional[bool] = None


class AddParcelForm(CamelModel):
    """Raw add-parcel form input; required fields are checked by the form service."""
    item_name: Optional[str] = None
    tracking_code: Optional[str] = None
    carrier: Optional[Carrier] = None
    direction: ShipmentDirection = ShipmentDirection.INCOMING
    status: Optional[ShipmentStatus] = None
    image: Optional[str] = None
    receipt_image: Optional[str] = None
    packaging_photo: Optional[str] = None
    packing_note: Optional[str] = None
    shipping_deadline: Optional[date] = None
    pickup_location: Optional[PickupLocation] = None


class ShipmentStats(CamelModel):
    total: int = 0
    incoming: int = 0
    outgoing: int = 0
    in_transit: int = 0
    pickup: int = 0
    delivered: int = 0
    archived: int = 0


class ShipmentOverview(CamelModel):
    shipments: List[ShipmentData]
    stats: ShipmentStats
    cleanup_count: int = 0
    show_archived: bool = False


class ArchiveResponse(CamelModel):
    archived: int
    message: Optional[str] = None


class DeadlineInfo(CamelModel):
    label: str
    color: str  # "red" | "orange" | "green"
    days_left: int


class LinkResponse(CamelModel):
    url: str


class TrackingRefreshResponse(CamelModel):
    refreshed: int
    shipments: List[ShipmentData]
