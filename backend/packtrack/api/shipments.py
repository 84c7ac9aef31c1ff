"""
Shipment API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from packtrack.api.deps import get_controller
from packtrack.config.catalog_loader import get_carrier_name
from packtrack.models.shipment import Carrier
from packtrack.schemas.shipment import (
    AddParcelForm,
    ArchiveResponse,
    DeadlineInfo,
    LinkResponse,
    ShipmentData,
    ShipmentOverview,
    ShipmentUpdate,
    TrackingRefreshResponse,
)
from packtrack.services.deadline import classify_deadline
from packtrack.services.errors import ValidationError
from packtrack.services.filtering import ALL, build_overview
from packtrack.services.parcel_form import build_new_shipment, clean_update
from packtrack.services.pickup_code import render_svg
from packtrack.services.share_links import build_map_link, build_share_link
from packtrack.services.shipment_state import ShipmentStateController
from packtrack.services.tracking import refresh_tracking

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_or_404(controller: ShipmentStateController, shipment_id: str) -> ShipmentData:
    shipment = controller.get(shipment_id)
    if not shipment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipment {shipment_id} not found"
        )
    return shipment


@router.get("/", response_model=ShipmentOverview)
async def list_shipments(
    archived: bool = False,
    direction: str = ALL,
    status_filter: str = Query(ALL, alias="status"),
    q: str = "",
    controller: ShipmentStateController = Depends(get_controller)
):
    """Dashboard view: filtered shipments plus counts for the active or archived list."""
    return build_overview(
        controller.shipments,
        show_archived=archived,
        direction=direction,
        status=status_filter,
        query=q.strip(),
    )


@router.post("/", response_model=ShipmentData, status_code=status.HTTP_201_CREATED)
async def add_shipment(
    form: AddParcelForm,
    controller: ShipmentStateController = Depends(get_controller)
):
    """Add a parcel from the add-parcel form."""
    try:
        new_shipment = build_new_shipment(form)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "missingFields": e.missing_fields}
        )

    created = controller.add(new_shipment)
    if created is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to save shipment"
        )
    logger.info(f"Added shipment {created.id} ({created.tracking_code}) for owner {controller.owner_id}")
    return created


@router.get("/carriers")
async def list_carriers():
    """Carriers offered by the add-parcel form."""
    return {
        "carriers": [
            {"value": carrier.value, "name": get_carrier_name(carrier.value)}
            for carrier in Carrier
        ]
    }


@router.post("/archive-completed", response_model=ArchiveResponse)
async def archive_completed(
    controller: ShipmentStateController = Depends(get_controller)
):
    """Archive every delivered, picked-up or shipped parcel."""
    count = controller.archive_completed()
    message = None
    if count > 0:
        message = f"{count} {'parcel' if count == 1 else 'parcels'} archived"
    return ArchiveResponse(archived=count, message=message)


@router.post("/refresh-tracking", response_model=TrackingRefreshResponse)
async def refresh_tracking_status(
    controller: ShipmentStateController = Depends(get_controller)
):
    """Ask the carriers for the latest status of every parcel still on its way."""
    refreshed = await refresh_tracking(controller)
    return TrackingRefreshResponse(refreshed=refreshed, shipments=controller.shipments)


@router.get("/{shipment_id}", response_model=ShipmentData)
async def get_shipment(
    shipment_id: str,
    controller: ShipmentStateController = Depends(get_controller)
):
    return _get_or_404(controller, shipment_id)


@router.patch("/{shipment_id}", response_model=ShipmentData)
async def update_shipment(
    shipment_id: str,
    payload: ShipmentUpdate,
    controller: ShipmentStateController = Depends(get_controller)
):
    """Apply a partial update; fields not sent are left untouched."""
    _get_or_404(controller, shipment_id)
    try:
        updates = clean_update(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "missingFields": e.missing_fields}
        )

    if not controller.update(shipment_id, updates):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to update shipment {shipment_id}"
        )
    return controller.get(shipment_id)


@router.delete("/{shipment_id}")
async def remove_shipment(
    shipment_id: str,
    controller: ShipmentStateController = Depends(get_controller)
):
    _get_or_404(controller, shipment_id)
    if not controller.remove(shipment_id):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to remove shipment {shipment_id}"
        )
    return {"message": f"Shipment {shipment_id} removed"}


@router.get("/{shipment_id}/deadline", response_model=DeadlineInfo)
async def get_deadline(
    shipment_id: str,
    controller: ShipmentStateController = Depends(get_controller)
):
    shipment = _get_or_404(controller, shipment_id)
    info = classify_deadline(shipment.shipping_deadline)
    if info is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipment {shipment_id} has no shipping deadline"
        )
    return info


@router.get("/{shipment_id}/share-link", response_model=LinkResponse)
async def get_share_link(
    shipment_id: str,
    controller: ShipmentStateController = Depends(get_controller)
):
    """Messaging link asking a contact to drop off or pick up the parcel."""
    return LinkResponse(url=build_share_link(_get_or_404(controller, shipment_id)))


@router.get("/{shipment_id}/map-link", response_model=LinkResponse)
async def get_map_link(
    shipment_id: str,
    controller: ShipmentStateController = Depends(get_controller)
):
    shipment = _get_or_404(controller, shipment_id)
    if not shipment.pickup_location:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipment {shipment_id} has no pickup location"
        )
    return LinkResponse(url=build_map_link(shipment.pickup_location))


@router.get("/{shipment_id}/pickup-code.svg")
async def get_pickup_code(
    shipment_id: str,
    controller: ShipmentStateController = Depends(get_controller)
):
    """Placeholder code image built from the pickup PIN."""
    shipment = _get_or_404(controller, shipment_id)
    if not shipment.pickup_location:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipment {shipment_id} has no pickup location"
        )
    return Response(content=render_svg(shipment.pickup_location.pin_code), media_type="image/svg+xml")
