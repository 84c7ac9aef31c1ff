"""
Demo parcels for a fresh account.
"""
import logging
from typing import List

from packtrack.models.shipment import Carrier, ShipmentStatus
from packtrack.schemas.shipment import PickupLocation, ShipmentCreate
from packtrack.services.shipment_store import ShipmentStore

logger = logging.getLogger(__name__)

DEMO_SHIPMENTS: List[ShipmentCreate] = [
    ShipmentCreate(
        item_name="Vintage Denim Jacket - Levi's 501",
        image="/images/product-1.jpg",
        status=ShipmentStatus.IN_TRANSIT,
        carrier=Carrier.MONDIAL_RELAY,
        tracking_code="MR-2849301847",
        last_update="2h ago",
    ),
    ShipmentCreate(
        item_name="Nike Air Max 90 - White",
        image="/images/product-2.jpg",
        status=ShipmentStatus.READY_FOR_PICKUP,
        carrier=Carrier.DHL,
        tracking_code="DHL-9483726150",
        last_update="30m ago",
        pickup_location=PickupLocation(
            name="DHL ServicePoint - Albert Heijn",
            address="Kalverstraat 92",
            city="Amsterdam",
            postal_code="1012 PH",
            opening_hours="Mon-Sat 08:00 - 22:00",
            pin_code="847291",
            lat=52.3702,
            lng=4.8952,
        ),
    ),
    ShipmentCreate(
        item_name="Designer Handbag - Beige Leather",
        image="/images/product-3.jpg",
        status=ShipmentStatus.DELIVERED,
        carrier=Carrier.POSTNL,
        tracking_code="3SPOST029384756",
        last_update="1d ago",
    ),
    ShipmentCreate(
        item_name="Wool Scarf - Earth Tones",
        image="/images/product-4.jpg",
        status=ShipmentStatus.PROCESSING,
        carrier=Carrier.MONDIAL_RELAY,
        tracking_code="MR-7392018463",
        last_update="5h ago",
    ),
    ShipmentCreate(
        item_name="Vintage Watch - Seiko Automatic",
        image="/images/product-5.jpg",
        status=ShipmentStatus.IN_TRANSIT,
        carrier=Carrier.POSTNL,
        tracking_code="3SPOST847291036",
        last_update="1h ago",
    ),
    ShipmentCreate(
        item_name="Ray-Ban Aviator Sunglasses",
        image="/images/product-6.jpg",
        status=ShipmentStatus.IN_TRANSIT,
        carrier=Carrier.DHL,
        tracking_code="DHL-1029384756",
        last_update="4h ago",
    ),
]


def seed_demo_shipments(store: ShipmentStore, owner_id: str) -> int:
    """Insert the demo parcels the owner does not have yet. Returns how many were added."""
    added = 0
    # Reversed so the first demo parcel ends up newest
    for shipment in reversed(DEMO_SHIPMENTS):
        if store.exists(owner_id, shipment.tracking_code):
            logger.info(f"Demo parcel {shipment.tracking_code} already present, skipping")
            continue
        store.insert(owner_id, shipment)
        added += 1
    return added
