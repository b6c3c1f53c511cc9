"""API tests for /api/auth and /api/users."""

NEW_USER = {
    "email": "Agent@Test.com",
    "password": "secret1",
    "firstname": "Juan",
    "lastname": "Cruz",
    "reference_id": "REF-100",
}


# ─── Register / login ────────────────────────────────────────────────────────

def test_register(anon_client):
    res = anon_client.post("/api/auth/register", json=NEW_USER)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["email"] == "agent@test.com"
    assert data["role"] == "user"
    assert "hashed_password" not in data


def test_register_duplicate_email(anon_client):
    res = anon_client.post("/api/auth/register", json={**NEW_USER, "email": "admin@test.com"})
    assert res.status_code == 409


def test_register_duplicate_reference_id(anon_client):
    res = anon_client.post("/api/auth/register", json={**NEW_USER, "reference_id": "REF-001"})
    assert res.status_code == 409


def test_register_validation(anon_client):
    res = anon_client.post("/api/auth/register", json={**NEW_USER, "password": "123"})
    assert res.status_code == 400
    res = anon_client.post("/api/auth/register", json={**NEW_USER, "email": "not-an-email"})
    assert res.status_code == 400


def test_login_and_me(anon_client):
    assert anon_client.get("/api/auth/me").status_code == 401
    res = anon_client.post("/api/auth/login", json={
        "email": "ADMIN@test.com", "password": "admin123", "device_id": "dev-1",
    })
    assert res.status_code == 200
    me = anon_client.get("/api/auth/me").json()["data"]
    assert me["reference_id"] == "REF-001"


def test_login_wrong_password(anon_client):
    res = anon_client.post("/api/auth/login", json={"email": "admin@test.com", "password": "wrong"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid email or password"}


def test_login_rate_limited(anon_client):
    for _ in range(10):
        anon_client.post("/api/auth/login", json={"email": "admin@test.com", "password": "wrong"})
    res = anon_client.post("/api/auth/login", json={"email": "admin@test.com", "password": "admin123"})
    assert res.status_code == 429


def test_logout_clears_session(client):
    assert client.post("/api/auth/logout").status_code == 200
    assert client.get("/api/auth/me").status_code == 401


# ─── Activity logs ───────────────────────────────────────────────────────────

def test_login_and_logout_are_logged(client):
    client.post("/api/auth/logout")
    client.post("/api/auth/login", json={"email": "admin@test.com", "password": "admin123", "device_id": "dev-9"})

    logs = client.get("/api/auth/logs").json()["data"]
    assert [log["status"] for log in logs[:3]] == ["login", "logout", "login"]
    assert logs[0]["device_id"] == "dev-9"


def test_non_admin_sees_own_logs(client):
    client.post("/api/auth/register", json=NEW_USER)
    client.post("/api/auth/logout")
    client.post("/api/auth/login", json={"email": "agent@test.com", "password": "secret1"})

    logs = client.get("/api/auth/logs", params={"reference_id": "REF-001"}).json()["data"]
    assert logs
    assert {log["reference_id"] for log in logs} == {"REF-100"}


# ─── Directory ───────────────────────────────────────────────────────────────

def test_user_directory(anon_client):
    anon_client.post("/api/auth/register", json=NEW_USER)
    res = anon_client.get("/api/users")
    assert res.status_code == 200
    rows = res.json()["data"]
    assert {r["reference_id"] for r in rows} == {"REF-001", "REF-100"}
    assert set(rows[0]) == {"firstname", "lastname", "reference_id", "profile_picture"}


def test_transfer_targets_exclude_owner(anon_client):
    anon_client.post("/api/auth/register", json=NEW_USER)
    res = anon_client.get("/api/users/transfer", params={"referenceid": "REF-001"})
    assert res.status_code == 200
    assert [r["reference_id"] for r in res.json()["data"]] == ["REF-100"]


def test_transfer_targets_need_referenceid(anon_client):
    assert anon_client.get("/api/users/transfer").status_code == 400


def test_health(anon_client):
    res = anon_client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}
    assert res.headers["X-Content-Type-Options"] == "nosniff"
