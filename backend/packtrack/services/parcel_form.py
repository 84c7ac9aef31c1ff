"""
Turns add-parcel form input into a shipment ready for insertion, and checks
partial updates against the same rules.
"""
from pydantic.alias_generators import to_camel

from packtrack.models.shipment import ShipmentDirection, ShipmentStatus
from packtrack.schemas.shipment import AddParcelForm, ShipmentCreate, ShipmentUpdate
from packtrack.services.errors import ValidationError
from packtrack.services.shipment_store import DEFAULT_LAST_UPDATE, PLACEHOLDER_IMAGE

# Columns that may be changed but never cleared
REQUIRED_FIELDS = ("item_name", "image", "status", "direction", "carrier", "tracking_code", "last_update")


def _clean(value):
    if value is None:
        return None
    value = value.strip()
    return value or None


def default_status(direction: ShipmentDirection) -> ShipmentStatus:
    if direction == ShipmentDirection.OUTGOING:
        return ShipmentStatus.AWAITING_DROPOFF
    return ShipmentStatus.PROCESSING


def build_new_shipment(form: AddParcelForm) -> ShipmentCreate:
    """
    Validate the form and build the shipment.

    Raises ValidationError listing the missing required fields (item name,
    tracking code, carrier) before anything reaches the store.
    """
    item_name = _clean(form.item_name)
    tracking_code = _clean(form.tracking_code)

    missing = []
    if not item_name:
        missing.append("itemName")
    if not tracking_code:
        missing.append("trackingCode")
    if not form.carrier:
        missing.append("carrier")
    if missing:
        raise ValidationError(missing)

    direction = form.direction or ShipmentDirection.INCOMING
    return ShipmentCreate(
        item_name=item_name,
        image=_clean(form.image) or PLACEHOLDER_IMAGE,
        status=form.status or default_status(direction),
        direction=direction,
        carrier=form.carrier,
        tracking_code=tracking_code.upper(),
        last_update=DEFAULT_LAST_UPDATE,
        pickup_location=form.pickup_location,
        receipt_image=_clean(form.receipt_image),
        packaging_photo=_clean(form.packaging_photo),
        packing_note=_clean(form.packing_note),
        shipping_deadline=form.shipping_deadline,
    )


def clean_update(payload: ShipmentUpdate) -> dict:
    """
    Validate a partial update and return the columns to write.

    Only fields the client sent are returned. Required fields can be changed
    but not cleared, and an archived parcel cannot be brought back.
    """
    updates = payload.model_dump(exclude_unset=True)

    if updates.get("archived") is False:
        raise ValidationError(["archived"], "Archived parcels cannot be restored")

    for key in ("item_name", "tracking_code"):
        if key in updates:
            updates[key] = _clean(updates[key])
    if updates.get("tracking_code"):
        updates["tracking_code"] = updates["tracking_code"].upper()

    missing = [to_camel(key) for key in REQUIRED_FIELDS if key in updates and updates[key] is None]
    if missing:
        raise ValidationError(missing)
    return updates
