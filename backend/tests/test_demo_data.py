# tests/test_demo_data.py
from factories import make_row

from packtrack.services.demo_data import DEMO_SHIPMENTS, seed_demo_shipments


def test_seed_adds_demo_parcels_once(store, owner_id):
    assert seed_demo_shipments(store, owner_id) == len(DEMO_SHIPMENTS)
    assert seed_demo_shipments(store, owner_id) == 0

    shipments = store.fetch_all(owner_id)
    assert len(shipments) == 6
    nike = next(s for s in shipments if s.item_name.startswith("Nike"))
    assert nike.pickup_location.pin_code == "847291"


def test_seed_skips_existing_tracking_codes(db, store, owner_id):
    make_row(db, owner_id, tracking_code="DHL-9483726150")
    assert seed_demo_shipments(store, owner_id) == 5
