# tests/conftest.py
from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# Must be set before packtrack.db.database is imported: the engine is built at import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SYNC_PHASE_DELAY_MS"] = "0"
os.environ["SYNC_FINAL_DELAY_MS"] = "0"
os.environ["SYNC_SOURCE_LATENCY_SCALE"] = "0"
os.environ["TRACKING_LATENCY_MS"] = "0"

from packtrack.main import app  # noqa: E402
from packtrack.api.deps import get_current_owner  # noqa: E402
from packtrack.db.database import SessionLocal  # noqa: E402
from packtrack.models import Shipment  # noqa: E402
from packtrack.services.integration_sync import SyncRegistry  # noqa: E402
from packtrack.services.shipment_store import ShipmentStore  # noqa: E402

OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"


@pytest.fixture(autouse=True)
def clean_shipments():
    yield
    db = SessionLocal()
    try:
        db.query(Shipment).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db) -> ShipmentStore:
    return ShipmentStore(db)


@pytest.fixture
def owner_id() -> str:
    return OWNER_ID


@pytest.fixture
def client():
    """TestClient signed in as OWNER_ID, with a fresh sync registry."""
    original_registry = app.state.sync_registry
    app.state.sync_registry = SyncRegistry(SessionLocal)
    app.dependency_overrides[get_current_owner] = lambda: OWNER_ID
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        app.state.sync_registry = original_registry
