# tests/test_tracking.py
from datetime import datetime

import pytest
from factories import make_row

from packtrack.models import ShipmentStatus
from packtrack.services.shipment_state import ShipmentStateController
from packtrack.services.tracking import (
    POSSIBLE_STATUSES,
    fetch_tracking_update,
    refresh_tracking,
    tracking_seed,
)

NOW = datetime(2026, 2, 5, 14, 7)


@pytest.mark.asyncio
async def test_lookup_is_stable_within_a_minute():
    first = await fetch_tracking_update("DHL-9483726150", now=NOW, latency=0)
    again = await fetch_tracking_update("DHL-9483726150", now=NOW.replace(second=40), latency=0)

    assert first == again
    assert first.last_update == "Updated 14:07"
    assert first.status == POSSIBLE_STATUSES[tracking_seed("DHL-9483726150", NOW) % len(POSSIBLE_STATUSES)]


@pytest.mark.asyncio
async def test_refresh_skips_final_statuses(db, store, owner_id):
    moving = make_row(db, owner_id, status="in-transit", tracking_code="MR-2849301847")
    delivered = make_row(db, owner_id, status="delivered", last_update="1d ago")
    failed = make_row(db, owner_id, status="exception", last_update="2d ago")
    controller = ShipmentStateController(store, owner_id)
    controller.load()

    refreshed = await refresh_tracking(controller, now=NOW, latency=0)

    assert refreshed == 1
    assert controller.get(moving.id).last_update == "Updated 14:07"
    assert controller.get(delivered.id).last_update == "1d ago"
    assert controller.get(failed.id).status == ShipmentStatus.EXCEPTION
    # Persisted, not only cached
    persisted = {s.id: s for s in store.fetch_all(owner_id)}
    assert persisted[moving.id].last_update == "Updated 14:07"
