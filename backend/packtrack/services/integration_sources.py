"""
Marketplace sources for the sync import.

The fetchers return canned records after a simulated delay. To connect a real
marketplace, replace the body of its fetcher and map the response to
ShipmentData; the orchestrator stays the same.
"""
from __future__ import annotations

import asyncio
import logging
import time
from datetime import date
from typing import Awaitable, Callable, Dict, List, Tuple

from packtrack.config.catalog_loader import get_integration_sources
from packtrack.models.shipment import Carrier, ShipmentDirection, ShipmentStatus
from packtrack.schemas.shipment import ShipmentData

logger = logging.getLogger(__name__)

SYNCED_LABEL = "Just synchronised"

Fetcher = Callable[[float], Awaitable[List[ShipmentData]]]


def _stamp() -> int:
    return int(time.time() * 1000)


async def fetch_vinted_shipments(latency_scale: float = 1.0) -> List[ShipmentData]:
    await asyncio.sleep(0.3 * latency_scale)
    return [
        ShipmentData(
            id=f"vinted-sync-{_stamp()}",
            item_name="Zara trousers girls 104",
            image="/images/product-4.jpg",
            status=ShipmentStatus.AWAITING_DROPOFF,
            direction=ShipmentDirection.OUTGOING,
            carrier=Carrier.VINTED_GO,
            tracking_code="17709876543210987",
            last_update=SYNCED_LABEL,
            packing_note="Vinted sale",
            shipping_deadline=date(2026, 2, 10),
        )
    ]


async def fetch_bolcom_shipments(latency_scale: float = 1.0) -> List[ShipmentData]:
    await asyncio.sleep(0.2 * latency_scale)
    return [
        ShipmentData(
            id=f"bolcom-sync-{_stamp()}",
            item_name="Samsung USB-C Cable 2m - Bol.com",
            image="/images/product-5.jpg",
            status=ShipmentStatus.PROCESSING,
            direction=ShipmentDirection.INCOMING,
            carrier=Carrier.DHL,
            tracking_code="DHL-5829174630",
            last_update=SYNCED_LABEL,
        )
    ]


SOURCE_FETCHERS: Dict[str, Fetcher] = {
    "vinted": fetch_vinted_shipments,
    "bolcom": fetch_bolcom_shipments,
}


def _source_name(source_id: str) -> str:
    for source in get_integration_sources():
        if source.id == source_id:
            return source.name
    return source_id


async def fetch_all_integration_shipments(
    active_ids: List[str],
    latency_scale: float = 1.0,
    fetchers: Dict[str, Fetcher] = None,
) -> Tuple[List[ShipmentData], List[str]]:
    """
    Fetch candidates from every active source that has a fetcher.

    Sources are awaited one after the other. Returns the concatenated
    candidates and the display names of the sources that were fetched.
    """
    fetchers = SOURCE_FETCHERS if fetchers is None else fetchers
    parcels: List[ShipmentData] = []
    sources: List[str] = []
    for source_id, fetcher in fetchers.items():
        if source_id not in active_ids:
            continue
        found = await fetcher(latency_scale)
        logger.debug("Source %s returned %d candidate(s)", source_id, len(found))
        parcels.extend(found)
        sources.append(_source_name(source_id))
    return parcels, sources
