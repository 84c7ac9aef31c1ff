"""
Simulated carrier tracking lookup and bulk refresh.

The lookup is stable within one minute for a given tracking code so repeated
refreshes look like a live feed without jumping around.
"""
from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from packtrack.db.database import settings
from packtrack.models.shipment import ShipmentStatus
from packtrack.services.shipment_state import ShipmentStateController

logger = logging.getLogger(__name__)

POSSIBLE_STATUSES = [
    ShipmentStatus.PROCESSING,
    ShipmentStatus.IN_TRANSIT,
    ShipmentStatus.IN_TRANSIT,
    ShipmentStatus.IN_TRANSIT,
    ShipmentStatus.READY_FOR_PICKUP,
    ShipmentStatus.DELIVERED,
]

# Not refreshed: nothing left to learn from the carrier
FINAL_STATUSES = (ShipmentStatus.DELIVERED, ShipmentStatus.EXCEPTION)


@dataclass
class TrackingResult:
    status: ShipmentStatus
    last_update: str


def tracking_seed(tracking_code: str, now: datetime) -> int:
    return sum(ord(ch) for ch in tracking_code) + int(now.timestamp() // 60)


async def fetch_tracking_update(
    tracking_code: str,
    now: Optional[datetime] = None,
    latency: Optional[float] = None,
) -> TrackingResult:
    base = settings.tracking_latency if latency is None else latency
    if base > 0:
        await asyncio.sleep(base + random.random() * base * 2)

    now = now or datetime.now()
    status = POSSIBLE_STATUSES[tracking_seed(tracking_code, now) % len(POSSIBLE_STATUSES)]
    return TrackingResult(status=status, last_update=f"Updated {now:%H:%M}")


async def refresh_tracking(
    controller: ShipmentStateController,
    now: Optional[datetime] = None,
    latency: Optional[float] = None,
) -> int:
    """Refresh every shipment still moving. Returns how many were updated."""
    start = time.perf_counter()
    active = [s for s in controller.shipments if s.status not in FINAL_STATUSES]
    results: List[TrackingResult] = await asyncio.gather(
        *(fetch_tracking_update(s.tracking_code, now=now, latency=latency) for s in active)
    )

    refreshed = 0
    for shipment, result in zip(active, results):
        if controller.update(shipment.id, {"status": result.status, "last_update": result.last_update}):
            refreshed += 1

    logger.info(
        "Refreshed tracking for %d/%d shipment(s) of owner %s in %.2fs",
        refreshed,
        len(active),
        controller.owner_id,
        time.perf_counter() - start,
    )
    return refreshed
