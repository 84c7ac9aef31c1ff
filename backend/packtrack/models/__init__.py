from .shipment import Shipment, ShipmentStatus, ShipmentDirection, Carrier

__all__ = [
    "Shipment",
    "ShipmentStatus",
    "ShipmentDirection",
    "Carrier",
]
