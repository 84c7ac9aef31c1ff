"""
Shipment store - translates between the ShipmentData shape and the shipments
table, and performs the CRUD calls.

Every failure is raised as RemoteError; nothing is retried here.
"""
import enum
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from packtrack.models import Shipment, ShipmentDirection
from packtrack.schemas.shipment import PickupLocation, ShipmentCreate, ShipmentData
from packtrack.services.errors import RemoteError
from packtrack.services.filtering import COMPLETED_STATUSES

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "/images/placeholder.jpg"
DEFAULT_LAST_UPDATE = "just now"

# ShipmentData attribute -> shipments column
FIELD_TO_COLUMN = {
    "item_name": "item_name",
    "image": "image",
    "status": "status",
    "direction": "direction",
    "carrier": "carrier",
    "tracking_code": "tracking_code",
    "last_update": "last_update",
    "pickup_location": "pickup_location",
    "receipt_image": "receipt_image",
    "packaging_photo": "packaging_photo",
    "packing_note": "packing_note",
    "shipping_deadline": "shipping_deadline",
    "archived": "is_archived",
}


def row_to_shipment(row: Shipment) -> ShipmentData:
    return ShipmentData(
        id=row.id,
        item_name=row.item_name,
        image=row.image,
        status=row.status,
        direction=row.direction or ShipmentDirection.INCOMING,
        carrier=row.carrier,
        tracking_code=row.tracking_code,
        last_update=row.last_update,
        pickup_location=PickupLocation.model_validate(row.pickup_location) if row.pickup_location else None,
        receipt_image=row.receipt_image,
        packaging_photo=row.packaging_photo,
        packing_note=row.packing_note,
        shipping_deadline=row.shipping_deadline,
        archived=bool(row.is_archived),
    )


def _column_value(field: str, value: Any) -> Any:
    if value is None:
        return None
    if field == "pickup_location":
        # Stored as the nested camelCase structure the dashboard reads
        if not isinstance(value, PickupLocation):
            value = PickupLocation.model_validate(value)
        return value.model_dump(by_alias=True)
    if isinstance(value, enum.Enum):
        return value.value
    return value


def shipment_to_columns(updates: Dict[str, Any]) -> Dict[str, Any]:
    """Map the fields present in `updates` to column values. Absent fields stay absent."""
    columns = {}
    for field, value in updates.items():
        column = FIELD_TO_COLUMN.get(field)
        if column is None:
            continue
        columns[column] = _column_value(field, value)
    return columns


class ShipmentStore:
    """CRUD access to the shipments table for one database session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _remote(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RemoteError(operation, e) from e

    def fetch_all(self, owner_id: str) -> List[ShipmentData]:
        """All shipments of the owner, newest first."""
        with self._remote("fetch_all"):
            rows = (
                self.db.query(Shipment)
                .filter(Shipment.user_id == owner_id)
                .order_by(Shipment.created_at.desc())
                .all()
            )
        return [row_to_shipment(row) for row in rows]

    def exists(self, owner_id: str, tracking_code: str) -> bool:
        with self._remote("exists"):
            row = (
                self.db.query(Shipment.id)
                .filter(Shipment.user_id == owner_id, Shipment.tracking_code == tracking_code)
                .limit(1)
                .first()
            )
        return row is not None

    def insert(self, owner_id: str, shipment: Union[ShipmentCreate, ShipmentData]) -> ShipmentData:
        """
        Insert a shipment; any id on the input is ignored, the server assigns one.

        Missing image, direction, last update and archived flag get their defaults.
        """
        columns = shipment_to_columns(shipment.model_dump(exclude={"id"}))
        columns["image"] = columns.get("image") or PLACEHOLDER_IMAGE
        columns["direction"] = columns.get("direction") or ShipmentDirection.INCOMING.value
        columns["last_update"] = columns.get("last_update") or DEFAULT_LAST_UPDATE
        if columns.get("is_archived") is None:
            columns["is_archived"] = False

        with self._remote("insert"):
            row = Shipment(user_id=owner_id, **columns)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        logger.debug("Inserted shipment %s for owner %s", row.id, owner_id)
        return row_to_shipment(row)

    def update(self, shipment_id: str, updates: Dict[str, Any]) -> None:
        """Write only the fields present in `updates`."""
        columns = shipment_to_columns(updates)
        if not columns:
            return
        with self._remote("update"):
            self.db.query(Shipment).filter(Shipment.id == shipment_id).update(
                columns, synchronize_session=False
            )
            self.db.commit()

    def remove(self, shipment_id: str) -> None:
        with self._remote("remove"):
            self.db.query(Shipment).filter(Shipment.id == shipment_id).delete(synchronize_session=False)
            self.db.commit()

    def archive_completed(self, owner_id: str) -> int:
        """Archive every non-archived completed shipment of the owner. Returns rows affected."""
        with self._remote("archive_completed"):
            count = (
                self.db.query(Shipment)
                .filter(
                    Shipment.user_id == owner_id,
                    Shipment.is_archived == False,  # noqa: E712
                    Shipment.status.in_([s.value for s in COMPLETED_STATUSES]),
                )
                .update({Shipment.is_archived: True}, synchronize_session=False)
            )
            self.db.commit()
        return count
