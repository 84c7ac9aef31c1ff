"""
Script to seed the demo parcels for one owner.

Usage: python scripts/seed_demo_shipments.py <owner-id>
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from packtrack.db.database import Base, SessionLocal, engine
from packtrack.services.demo_data import seed_demo_shipments
from packtrack.services.errors import RemoteError
from packtrack.services.shipment_store import ShipmentStore


def main(owner_id: str):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        added = seed_demo_shipments(ShipmentStore(db), owner_id)
        print(f"Seeded {added} demo parcel(s) for owner {owner_id}")
    except RemoteError as e:
        print(f"Error: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/seed_demo_shipments.py <owner-id>")
        sys.exit(1)
    main(sys.argv[1])
