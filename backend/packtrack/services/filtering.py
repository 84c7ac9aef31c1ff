"""
Status taxonomy and dashboard filtering over an in-memory list of shipments.
"""
from typing import Iterable, List, Optional, Tuple, Union

from packtrack.models.shipment import ShipmentDirection, ShipmentStatus
from packtrack.schemas.shipment import ShipmentData, ShipmentOverview, ShipmentStats

ALL = "all"

COMPLETED_STATUSES = (
    ShipmentStatus.DELIVERED,
    ShipmentStatus.PICKED_UP,
    ShipmentStatus.SHIPPED,
)


def is_completed(status: Union[ShipmentStatus, str]) -> bool:
    return ShipmentStatus(status) in COMPLETED_STATUSES


def _direction(shipment: ShipmentData) -> ShipmentDirection:
    return shipment.direction or ShipmentDirection.INCOMING


def partition(shipments: Iterable[ShipmentData]) -> Tuple[List[ShipmentData], List[ShipmentData]]:
    """Split into (active, archived), preserving order."""
    active, archived = [], []
    for shipment in shipments:
        (archived if shipment.archived else active).append(shipment)
    return active, archived


def matches(
    shipment: ShipmentData,
    direction: Optional[str] = ALL,
    status: Optional[str] = ALL,
    query: Optional[str] = "",
) -> bool:
    if direction and direction != ALL and _direction(shipment).value != direction:
        return False
    if status and status != ALL and ShipmentStatus(shipment.status).value != status:
        return False
    if query:
        needle = query.lower()
        if needle not in shipment.item_name.lower() and needle not in shipment.tracking_code.lower():
            return False
    return True


def filter_shipments(
    base: Iterable[ShipmentData],
    direction: Optional[str] = ALL,
    status: Optional[str] = ALL,
    query: Optional[str] = "",
) -> List[ShipmentData]:
    """Keep the shipments matching direction AND status AND search query, in order."""
    return [s for s in base if matches(s, direction, status, query)]


def compute_stats(base: List[ShipmentData], archived: List[ShipmentData]) -> ShipmentStats:
    """Counts over the displayed base list; `archived` is always the full archived partition."""
    return ShipmentStats(
        total=len(base),
        incoming=sum(1 for s in base if _direction(s) == ShipmentDirection.INCOMING),
        outgoing=sum(1 for s in base if _direction(s) == ShipmentDirection.OUTGOING),
        in_transit=sum(1 for s in base if s.status == ShipmentStatus.IN_TRANSIT),
        pickup=sum(1 for s in base if s.status == ShipmentStatus.READY_FOR_PICKUP),
        delivered=sum(1 for s in base if s.status == ShipmentStatus.DELIVERED),
        archived=len(archived),
    )


def cleanup_eligible_count(shipments: Iterable[ShipmentData]) -> int:
    """Non-archived shipments with a completed status; drives the bulk-archive action."""
    return sum(1 for s in shipments if not s.archived and is_completed(s.status))


def build_overview(
    shipments: List[ShipmentData],
    show_archived: bool = False,
    direction: Optional[str] = ALL,
    status: Optional[str] = ALL,
    query: Optional[str] = "",
) -> ShipmentOverview:
    active, archived = partition(shipments)
    base = archived if show_archived else active
    return ShipmentOverview(
        shipments=filter_shipments(base, direction, status, query),
        stats=compute_stats(base, archived),
        cleanup_count=cleanup_eligible_count(active),
        show_archived=show_archived,
    )
