"""API tests for /api/preferences."""


def test_unknown_key_is_null(client):
    res = client.get("/api/preferences/sidebarOpenSections")
    assert res.status_code == 200
    assert res.json()["data"] == {"key": "sidebarOpenSections", "value": None}


def test_put_and_overwrite(client):
    client.put("/api/preferences/sidebarOpenSections", json={"value": {"inventory": True}})
    res = client.put("/api/preferences/sidebarOpenSections", json={"value": {"inventory": False, "tickets": True}})
    assert res.json()["data"]["value"] == {"inventory": False, "tickets": True}

    res = client.get("/api/preferences/sidebarOpenSections")
    assert res.json()["data"]["value"] == {"inventory": False, "tickets": True}


def test_values_are_per_user(client):
    client.put("/api/preferences/theme", json={"value": "dark"})
    client.post("/api/auth/register", json={
        "email": "other@test.com", "password": "secret1", "firstname": "O", "lastname": "T",
        "reference_id": "REF-002",
    })
    client.post("/api/auth/logout")
    client.post("/api/auth/login", json={"email": "other@test.com", "password": "secret1"})
    assert client.get("/api/preferences/theme").json()["data"]["value"] is None


def test_requires_login(anon_client):
    assert anon_client.get("/api/preferences/theme").status_code == 401
