"""API tests for /api/inventory."""
from datetime import date

import assetdesk.services.inventory_service as inventory_service
from assetdesk.services import dates
from assetdesk.config import settings
from assetdesk.services.dates import local_today, asset_age

REFERENCE_ID = "REF-001"
YEAR = local_today(settings.APP_TIMEZONE).year


def _create(client, **fields):
    payload = {"referenceid": REFERENCE_ID, "status": "SPARE"}
    payload.update(fields)
    res = client.post("/api/inventory", json=payload)
    assert res.status_code == 201, res.text
    return res.json()["data"]


# ─── Create ──────────────────────────────────────────────────────────────────

def test_create_generates_asset_tag(client):
    first = _create(client, asset_type="laptop", brand="Dell")
    second = _create(client, asset_type="LAPTOP")
    monitor = _create(client, asset_type="Monitor")

    assert first["asset_tag"] == f"LAP-{YEAR}-001"
    assert second["asset_tag"] == f"LAP-{YEAR}-002"
    assert monitor["asset_tag"] == f"MON-{YEAR}-001"
    assert first["asset_type"] == "LAPTOP"
    assert first["status"] == "SPARE"
    assert first["date_updated"] is None


def test_create_derives_warranty_and_age(client):
    item = _create(client, asset_type="DESKTOP", purchase_date="2024-02-29")
    assert item["warranty_date"] == "2025-02-28"
    assert item["asset_age"] == asset_age("2024-02-29", local_today(settings.APP_TIMEZONE))


def test_auto_tag_retries_after_collision(client, monkeypatch):
    taken = _create(client, asset_type="LAPTOP")["asset_tag"]
    tags = iter([taken, f"LAP-{YEAR}-007"])
    monkeypatch.setattr(inventory_service, "next_asset_tag", lambda db, asset_type, year=None: next(tags))

    res = client.post("/api/inventory", json={"referenceid": REFERENCE_ID, "status": "SPARE", "asset_type": "LAPTOP"})
    assert res.status_code == 201
    assert res.json()["data"]["asset_tag"] == f"LAP-{YEAR}-007"


def test_auto_tag_gives_up_after_retries(client, monkeypatch):
    taken = _create(client, asset_type="LAPTOP")["asset_tag"]
    calls = []

    def always_taken(db, asset_type, year=None):
        calls.append(asset_type)
        return taken

    monkeypatch.setattr(inventory_service, "next_asset_tag", always_taken)

    res = client.post("/api/inventory", json={"referenceid": REFERENCE_ID, "status": "SPARE", "asset_type": "LAPTOP"})
    assert res.status_code == 409
    assert "unique asset tag" in res.json()["error"]
    assert len(calls) == settings.ASSET_TAG_MAX_RETRIES
    rows = client.get("/api/inventory/all", params={"referenceid": REFERENCE_ID}).json()["data"]
    assert len(rows) == 1


def test_cached_snapshot_recomputes_age(client, monkeypatch):
    _create(client, asset_type="LAPTOP", purchase_date="2024-01-01")
    first = client.get("/api/inventory/all", params={"referenceid": REFERENCE_ID}).json()
    assert first["cached"] is False

    monkeypatch.setattr(dates, "local_today", lambda tz_name=None: date(2030, 1, 1))
    second = client.get("/api/inventory/all", params={"referenceid": REFERENCE_ID}).json()
    assert second["cached"] is True
    assert second["data"][0]["asset_age"] == "6y, 0m, 0d"


def test_create_keeps_explicit_warranty(client):
    item = _create(client, purchase_date="2024-01-10", warranty_date="2027-01-10")
    assert item["warranty_date"] == "2027-01-10"


def test_create_explicit_tag(client):
    item = _create(client, asset_type="LAPTOP", asset_tag=f"LAP-{YEAR}-050")
    assert item["asset_tag"] == f"LAP-{YEAR}-050"
    # sequencing continues after the highest number, gaps are not refilled
    assert _create(client, asset_type="LAPTOP")["asset_tag"] == f"LAP-{YEAR}-051"


def test_create_duplicate_tag(client):
    _create(client, asset_type="LAPTOP", asset_tag=f"LAP-{YEAR}-001")
    res = client.post("/api/inventory", json={
        "referenceid": REFERENCE_ID, "status": "SPARE", "asset_type": "LAPTOP", "asset_tag": f"LAP-{YEAR}-001",
    })
    assert res.status_code == 409
    assert "already exists" in res.json()["error"]


def test_create_tag_prefix_must_match_type(client):
    res = client.post("/api/inventory", json={
        "referenceid": REFERENCE_ID, "status": "SPARE", "asset_type": "LAPTOP", "asset_tag": f"MON-{YEAR}-001",
    })
    assert res.status_code == 400
    assert "LAP-YYYY-NNN" in res.json()["error"]


def test_create_without_type_has_no_tag(client):
    item = _create(client, brand="Generic")
    assert item["asset_tag"] is None
    assert item["asset_type"] is None


def test_create_requires_referenceid_and_status(client):
    res = client.post("/api/inventory", json={"status": "SPARE"})
    assert res.status_code == 400
    assert "referenceid" in res.json()["error"]

    res = client.post("/api/inventory", json={"referenceid": REFERENCE_ID})
    assert res.status_code == 400
    assert "status" in res.json()["error"]


def test_create_rejects_unknown_status(client):
    res = client.post("/api/inventory", json={"referenceid": REFERENCE_ID, "status": "BROKEN"})
    assert res.status_code == 400


def test_blank_strings_are_missing_values(client):
    item = _create(client, location="", purchase_date="", brand="HP")
    assert item["location"] is None
    assert item["purchase_date"] is None
    assert item["warranty_date"] is None


def test_create_requires_login(anon_client):
    res = anon_client.post("/api/inventory", json={"referenceid": REFERENCE_ID, "status": "SPARE"})
    assert res.status_code == 401
    assert res.json() == {"error": "Login required"}


# ─── Read ────────────────────────────────────────────────────────────────────

def test_get_item(client):
    item = _create(client, asset_type="MONITOR")
    res = client.get(f"/api/inventory/{item['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["asset_tag"] == item["asset_tag"]


def test_get_item_not_found(client):
    res = client.get("/api/inventory/99999")
    assert res.status_code == 404
    assert res.json() == {"error": "Inventory item not found"}


def test_list_filters_and_pagination(client):
    _create(client, asset_type="LAPTOP", brand="Dell", location="HQ")
    _create(client, asset_type="LAPTOP", brand="Lenovo", location="HQ")
    _create(client, asset_type="MONITOR", brand="Dell", status="DEFECTIVE")
    _create(client, referenceid="OTHER-REF", asset_type="LAPTOP")

    res = client.get("/api/inventory", params={"referenceid": REFERENCE_ID})
    body = res.json()
    assert body["total"] == 3

    res = client.get("/api/inventory", params={"referenceid": REFERENCE_ID, "asset_type": "laptop"})
    assert res.json()["total"] == 2

    res = client.get("/api/inventory", params={"referenceid": REFERENCE_ID, "status": "defective"})
    assert [i["brand"] for i in res.json()["data"]] == ["Dell"]

    res = client.get("/api/inventory", params={"referenceid": REFERENCE_ID, "search": "leno"})
    assert res.json()["total"] == 1

    res = client.get("/api/inventory", params={"referenceid": REFERENCE_ID, "location": "HQ", "size": 1})
    body = res.json()
    assert body["total"] == 2
    assert body["pages"] == 2
    assert len(body["data"]) == 1


def test_list_requires_referenceid(client):
    res = client.get("/api/inventory")
    assert res.status_code == 400


def test_all_is_cached_until_a_write(client):
    _create(client, asset_type="LAPTOP")
    first = client.get("/api/inventory/all", params={"referenceid": REFERENCE_ID}).json()
    second = client.get("/api/inventory/all", params={"referenceid": REFERENCE_ID}).json()
    assert first["cached"] is False
    assert second["cached"] is True
    assert second["data"] == first["data"]

    _create(client, asset_type="MONITOR")
    third = client.get("/api/inventory/all", params={"referenceid": REFERENCE_ID}).json()
    assert third["cached"] is False
    assert len(third["data"]) == 2


def test_next_asset_tag(client):
    _create(client, asset_type="DESKTOP")
    res = client.get("/api/inventory/next-asset-tag", params={"asset_type": "desktop"})
    assert res.json() == {"asset_tag": f"DES-{YEAR}-002"}


def test_next_asset_tag_invalid_type(client):
    res = client.get("/api/inventory/next-asset-tag", params={"asset_type": "PRINTER"})
    assert res.status_code == 400
    res = client.get("/api/inventory/next-asset-tag")
    assert res.status_code == 400


def test_old_items(client):
    old = _create(client, asset_type="LAPTOP", purchase_date="2010-05-01")
    _create(client, asset_type="LAPTOP", purchase_date="2010-05-01", status="DISPOSE")
    _create(client, asset_type="LAPTOP", purchase_date=f"{YEAR}-01-01")
    _create(client, asset_type="LAPTOP")

    res = client.get("/api/inventory/old-items", params={"referenceid": REFERENCE_ID})
    assert [i["id"] for i in res.json()["data"]] == [old["id"]]


# ─── Update ──────────────────────────────────────────────────────────────────

def test_update_preserves_date_created(client):
    item = _create(client, asset_type="LAPTOP", brand="Dell")
    res = client.put(f"/api/inventory/{item['id']}", json={"brand": "HP", "status": "lend"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["brand"] == "HP"
    assert data["status"] == "LEND"
    assert data["date_created"] == item["date_created"]
    assert data["date_updated"] is not None


def test_update_purchase_date_recomputes_warranty(client):
    item = _create(client, purchase_date="2023-03-01")
    res = client.put(f"/api/inventory/{item['id']}", json={"purchase_date": "2024-06-15"})
    assert res.json()["data"]["warranty_date"] == "2025-06-15"


def test_update_tag_conflict(client):
    _create(client, asset_type="LAPTOP")
    other = _create(client, asset_type="LAPTOP")
    res = client.put(f"/api/inventory/{other['id']}", json={"asset_tag": f"LAP-{YEAR}-001"})
    assert res.status_code == 409


def test_update_type_must_match_tag_prefix(client):
    item = _create(client, asset_type="LAPTOP")
    res = client.put(f"/api/inventory/{item['id']}", json={"asset_type": "MONITOR"})
    assert res.status_code == 400
    assert "MON-YYYY-NNN" in res.json()["error"]
    assert client.get(f"/api/inventory/{item['id']}").json()["data"]["asset_type"] == "LAPTOP"


def test_update_type_together_with_matching_tag(client):
    item = _create(client, asset_type="LAPTOP")
    res = client.put(f"/api/inventory/{item['id']}",
                     json={"asset_type": "MONITOR", "asset_tag": f"MON-{YEAR}-010"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert (data["asset_type"], data["asset_tag"]) == ("MONITOR", f"MON-{YEAR}-010")


def test_update_type_of_untagged_item(client):
    item = _create(client)
    res = client.put(f"/api/inventory/{item['id']}", json={"asset_type": "DESKTOP"})
    assert res.status_code == 200
    assert res.json()["data"]["asset_tag"] is None


def test_update_not_found(client):
    res = client.put("/api/inventory/99999", json={"brand": "HP"})
    assert res.status_code == 404


# ─── Bulk status and delete ──────────────────────────────────────────────────

def test_change_status(client):
    a = _create(client, asset_type="LAPTOP")
    b = _create(client, asset_type="LAPTOP")
    res = client.post("/api/inventory/status", json={"ids": [a["id"], b["id"]], "new_status": "defective"})
    assert res.status_code == 200
    assert res.json()["data"] == {"success": True, "updated": 2}
    assert client.get(f"/api/inventory/{a['id']}").json()["data"]["status"] == "DEFECTIVE"


def test_change_status_needs_ids(client):
    res = client.post("/api/inventory/status", json={"ids": [], "new_status": "SPARE"})
    assert res.status_code == 400
    assert "No IDs provided" in res.json()["error"]


def test_bulk_delete(client):
    a = _create(client, asset_type="MONITOR")
    b = _create(client, asset_type="MONITOR")
    keep = _create(client, asset_type="MONITOR")

    res = client.request("DELETE", "/api/inventory", json={"ids": [a["id"], b["id"], 99999]})
    assert res.status_code == 200
    assert res.json()["data"] == {"success": True, "deleted": 2}

    remaining = client.get("/api/inventory", params={"referenceid": REFERENCE_ID}).json()
    assert [i["id"] for i in remaining["data"]] == [keep["id"]]


def test_bulk_delete_needs_ids(client):
    res = client.request("DELETE", "/api/inventory", json={"ids": []})
    assert res.status_code == 400
