"""
Shipment model - one tracked parcel owned by a user.
"""
from sqlalchemy import Column, String, DateTime, Date, Boolean, Text, Index, JSON, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import JSONB
import uuid
from datetime import datetime
import enum
from packtrack.db.database import Base


class ShipmentStatus(str, enum.Enum):
    PROCESSING = "processing"
    IN_TRANSIT = "in-transit"
    READY_FOR_PICKUP = "ready-for-pickup"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    PICKED_UP = "picked-up"
    EXCEPTION = "exception"
    AWAITING_DROPOFF = "awaiting-dropoff"


class ShipmentDirection(str, enum.Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


class Carrier(str, enum.Enum):
    MONDIAL_RELAY = "mondial-relay"
    DHL = "dhl"
    POSTNL = "postnl"
    DPD = "dpd"
    VINTED_GO = "vinted-go"


def _enum_column(enum_cls):
    return SQLEnum(
        enum_cls,
        native_enum=False,
        values_callable=lambda cls: [member.value for member in cls],
        validate_strings=True,
        length=32,
    )


def _new_id() -> str:
    return str(uuid.uuid4())


class Shipment(Base):
    __tablename__ = "shipments"

    id = Column(String(64), primary_key=True, default=_new_id)
    user_id = Column(String(64), nullable=False, index=True)

    item_name = Column(String, nullable=False)
    image = Column(Text, nullable=False)
    status = Column(_enum_column(ShipmentStatus), nullable=False)
    direction = Column(_enum_column(ShipmentDirection), nullable=False, default=ShipmentDirection.INCOMING.value)
    carrier = Column(_enum_column(Carrier), nullable=False)
    tracking_code = Column(String, nullable=False)  # Stored uppercased
    last_update = Column(String, nullable=False)  # Human label, e.g. "just now"

    # Name, address, PIN and coordinates of the collection point
    pickup_location = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)
    receipt_image = Column(Text, nullable=True)
    packaging_photo = Column(Text, nullable=True)
    packing_note = Column(Text, nullable=True)
    shipping_deadline = Column(Date, nullable=True)

    is_archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        # Lookup path for de-duplication during sync import; not a uniqueness constraint
        Index("ix_shipments_user_tracking_code", "user_id", "tracking_code"),
    )
