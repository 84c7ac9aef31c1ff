# tests/test_api_integrations.py
from factories import make_row

from packtrack.db.database import SessionLocal
from packtrack.main import app
from packtrack.services.integration_sync import SyncRegistry

BASE = "/api/integrations"


def test_overview_defaults(client):
    body = client.get(f"{BASE}/").json()

    assert [i["id"] for i in body["integrations"]] == ["postnl", "dhl", "ups", "dpd", "vinted", "bolcom", "amazon"]
    assert body["activeCount"] == 3
    assert body["lastSync"] is None
    assert body["sync"]["state"] == "idle"
    vinted = next(i for i in body["integrations"] if i["id"] == "vinted")
    assert vinted["connectedSince"] == "jan 2026"


def test_toggle(client):
    r = client.post(f"{BASE}/amazon/toggle")
    assert r.status_code == 200
    assert r.json()["active"] is True
    assert client.get(f"{BASE}/").json()["activeCount"] == 4

    assert client.post(f"{BASE}/amazon/toggle").json()["active"] is False
    assert client.post(f"{BASE}/myspace/toggle").status_code == 404


def test_sync_imports_and_reports(client, db, owner_id):
    make_row(db, owner_id, item_name="Nike Air Max 90 - White", status="ready-for-pickup")

    r = client.post(f"{BASE}/sync", params={"wait": "true"})
    assert r.status_code == 202
    body = r.json()
    assert body["state"] == "done"
    assert body["progress"] == 100
    assert body["summary"]["added"] == 2
    assert body["summary"]["statusUpdates"] == 1
    assert body["summary"]["imported"] == 3
    assert body["summary"]["toast"] == {"message": "3 parcels imported successfully", "kind": "success"}

    shipments = client.get("/api/shipments/").json()["shipments"]
    assert len(shipments) == 3
    assert {s["status"] for s in shipments if s["itemName"].startswith("Nike")} == {"picked-up"}

    overview = client.get(f"{BASE}/").json()
    assert overview["lastSync"] == body["summary"]["lastSync"]
    assert overview["sync"]["state"] == "done"
    assert client.get(f"{BASE}/sync").json()["state"] == "done"


def test_second_sync_reports_nothing_new(client):
    client.post(f"{BASE}/sync", params={"wait": "true"})
    body = client.post(f"{BASE}/sync", params={"wait": "true"}).json()

    assert body["summary"]["imported"] == 0
    assert body["summary"]["skipped"] == 2
    assert body["summary"]["toast"]["kind"] == "info"


def test_cancel_without_running_sync(client):
    assert client.delete(f"{BASE}/sync").status_code == 409


def test_failed_sync_is_reported_when_waiting(client):
    async def unavailable(latency_scale):
        raise RuntimeError("marketplace down")

    app.state.sync_registry = SyncRegistry(SessionLocal, fetchers={"vinted": unavailable})

    r = client.post(f"{BASE}/sync", params={"wait": "true"})
    assert r.status_code == 502
    assert r.json()["detail"] == "Sync failed: marketplace down"
    assert client.get(f"{BASE}/sync").json()["state"] == "failed"
