"""
Outbound deep links: messaging share text and map routing.
"""
from urllib.parse import quote, urlencode

from packtrack.models.shipment import ShipmentDirection
from packtrack.schemas.shipment import PickupLocation, ShipmentData

WHATSAPP_URL = "https://wa.me/"
MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


def share_text(shipment: ShipmentData) -> str:
    if shipment.direction == ShipmentDirection.OUTGOING:
        text = f"Hi! Could you drop off this parcel for me? Code: {shipment.tracking_code}."
        if shipment.packing_note:
            text += f" Packing note: {shipment.packing_note}."
    else:
        text = f"Hi! Could you pick up this parcel for me? Code: {shipment.tracking_code}."
        if shipment.pickup_location:
            text += f" Location: {shipment.pickup_location.name}."
    return text


def build_share_link(shipment: ShipmentData) -> str:
    return f"{WHATSAPP_URL}?{urlencode({'text': share_text(shipment)}, quote_via=quote)}"


def build_map_link(pickup: PickupLocation) -> str:
    return f"{MAPS_DIRECTIONS_URL}?api=1&destination={pickup.lat},{pickup.lng}"
