"""API tests for /api/activities."""
from assetdesk.realtime import feed

REFERENCE_ID = "REF-001"


def _payload(number="ACT-1", **fields):
    payload = {
        "referenceid": REFERENCE_ID,
        "tsm": "TSM-01",
        "manager": "MGR-01",
        "account_reference_number": "ACC-1",
        "status": "On-Progress",
        "activity_reference_number": number,
    }
    payload.update(fields)
    return payload


def test_create_activity(client):
    res = client.post("/api/activities", json=_payload())
    assert res.status_code == 201
    assert res.json()["data"]["activity_reference_number"] == "ACT-1"


def test_create_requires_all_fields(client):
    for field in ("referenceid", "tsm", "manager", "account_reference_number", "status",
                  "activity_reference_number"):
        res = client.post("/api/activities", json=_payload(**{field: ""}))
        assert res.status_code == 400, field


def test_duplicate_activity_reference(client):
    client.post("/api/activities", json=_payload())
    res = client.post("/api/activities", json=_payload())
    assert res.status_code == 409


def test_list_is_cached_and_invalidated(client):
    client.post("/api/activities", json=_payload("ACT-1"))

    first = client.get("/api/activities", params={"referenceid": REFERENCE_ID}).json()
    second = client.get("/api/activities", params={"referenceid": REFERENCE_ID}).json()
    assert first["cached"] is False
    assert second["cached"] is True

    client.post("/api/activities", json=_payload("ACT-2"))
    third = client.get("/api/activities", params={"referenceid": REFERENCE_ID}).json()
    assert third["cached"] is False
    assert [a["activity_reference_number"] for a in third["data"]] == ["ACT-2", "ACT-1"]


def test_list_scoped_to_referenceid(client):
    client.post("/api/activities", json=_payload("ACT-1"))
    client.post("/api/activities", json=_payload("ACT-2", referenceid="OTHER"))
    rows = client.get("/api/activities", params={"referenceid": "OTHER"}).json()["data"]
    assert [a["activity_reference_number"] for a in rows] == ["ACT-2"]


def test_update_status(client):
    activity = client.post("/api/activities", json=_payload()).json()["data"]
    client.get("/api/activities", params={"referenceid": REFERENCE_ID})

    res = client.patch(f"/api/activities/{activity['id']}", json={"status": "Done"})
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "Done"

    listed = client.get("/api/activities", params={"referenceid": REFERENCE_ID}).json()
    assert listed["cached"] is False
    assert listed["data"][0]["status"] == "Done"


def test_update_missing_activity(client):
    assert client.patch("/api/activities/999", json={"status": "Done"}).status_code == 404


def test_bulk_delete(client):
    a = client.post("/api/activities", json=_payload("ACT-1")).json()["data"]
    b = client.post("/api/activities", json=_payload("ACT-2")).json()["data"]
    keep = client.post("/api/activities", json=_payload("ACT-3")).json()["data"]
    client.get("/api/activities", params={"referenceid": REFERENCE_ID})

    with feed.subscribe("activities", {"referenceid": REFERENCE_ID}) as sub:
        res = client.request("DELETE", "/api/activities", json={"ids": [a["id"], b["id"], 99999]})
        events = sub.drain()
    assert res.status_code == 200
    assert res.json()["data"] == {"success": True, "deleted": 2}
    assert sorted(e["record"]["id"] for e in events) == [a["id"], b["id"]]
    assert {e["type"] for e in events} == {"delete"}

    listed = client.get("/api/activities", params={"referenceid": REFERENCE_ID}).json()
    assert listed["cached"] is False
    assert [r["id"] for r in listed["data"]] == [keep["id"]]


def test_bulk_delete_needs_ids(client):
    res = client.request("DELETE", "/api/activities", json={"ids": []})
    assert res.status_code == 400
    assert "No IDs provided" in res.json()["error"]


def test_bulk_delete_requires_login(anon_client):
    res = anon_client.request("DELETE", "/api/activities", json={"ids": [1]})
    assert res.status_code == 401
