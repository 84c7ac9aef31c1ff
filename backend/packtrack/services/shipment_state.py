"""
Shipment state controller - the in-memory list of one owner's shipments.

Every mutation goes through the store first and the cache only changes after
the store confirmed it, so the cache never shows a state the backend did not
accept. Store failures are logged and turn the call into a no-op.

Lifecycle: construct with a store and an owner id, call load(), and call
close() when the owner's session ends.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from packtrack.schemas.shipment import ShipmentCreate, ShipmentData
from packtrack.services.errors import RemoteError
from packtrack.services.filtering import is_completed
from packtrack.services.shipment_store import ShipmentStore

logger = logging.getLogger(__name__)


class ShipmentStateController:
    def __init__(self, store: ShipmentStore, owner_id: str):
        self.store = store
        self.owner_id = owner_id
        self._shipments: List[ShipmentData] = []
        self._loaded = False

    @property
    def shipments(self) -> List[ShipmentData]:
        return list(self._shipments)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get(self, shipment_id: str) -> Optional[ShipmentData]:
        for shipment in self._shipments:
            if shipment.id == shipment_id:
                return shipment
        return None

    def load(self) -> None:
        """Replace the cache with the store's records. Marks loaded even when the fetch fails."""
        try:
            self._shipments = self.store.fetch_all(self.owner_id)
        except RemoteError as e:
            logger.error("[PackTrack] Failed to load shipments: %s", e)
        finally:
            self._loaded = True

    refresh = load

    def add(self, shipment: Union[ShipmentCreate, ShipmentData]) -> Optional[ShipmentData]:
        try:
            created = self.store.insert(self.owner_id, shipment)
        except RemoteError as e:
            logger.error("[PackTrack] Failed to add shipment: %s", e)
            return None
        self._shipments.insert(0, created)
        return created

    def update(self, shipment_id: str, updates: Dict[str, Any]) -> bool:
        try:
            self.store.update(shipment_id, updates)
        except RemoteError as e:
            logger.error("[PackTrack] Failed to update shipment %s: %s", shipment_id, e)
            return False
        self._shipments = [
            _merge(s, updates) if s.id == shipment_id else s
            for s in self._shipments
        ]
        return True

    def remove(self, shipment_id: str) -> bool:
        try:
            self.store.remove(shipment_id)
        except RemoteError as e:
            logger.error("[PackTrack] Failed to remove shipment %s: %s", shipment_id, e)
            return False
        self._shipments = [s for s in self._shipments if s.id != shipment_id]
        return True

    def archive_completed(self) -> int:
        try:
            count = self.store.archive_completed(self.owner_id)
        except RemoteError as e:
            logger.error("[PackTrack] Failed to archive: %s", e)
            return 0
        if count > 0:
            self._shipments = [
                _merge(s, {"archived": True}) if not s.archived and is_completed(s.status) else s
                for s in self._shipments
            ]
        return count

    def close(self) -> None:
        self._shipments = []
        self._loaded = False
        self.store = None


def _merge(shipment: ShipmentData, updates: Dict[str, Any]) -> ShipmentData:
    """Shallow merge, re-validated so plain strings become enum members again."""
    fields = {k: v for k, v in updates.items() if k in ShipmentData.model_fields and k != "id"}
    return ShipmentData.model_validate({**shipment.model_dump(), **fields})
