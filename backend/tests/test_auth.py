from tests.conftest import auth_headers


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "admin@storyslip.dev"})
    assert resp.status_code == 200
    data = resp.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "admin"


def test_login_is_case_insensitive(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "  Editor@StorySlip.dev "})
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "editor@storyslip.dev"


def test_login_unknown_email(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "nobody@storyslip.dev"})
    assert resp.status_code == 401


def test_login_inactive_user(client, db, seed_users):
    seed_users["viewer"].is_active = False
    db.commit()
    resp = client.post("/api/auth/login", json={"email": "viewer@storyslip.dev"})
    assert resp.status_code == 401


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "owner@storyslip.dev")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["user_id"] == seed_users["owner"].user_id


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code in (401, 403)  # HTTPBearer raises 401 or 403 depending on version


def test_me_with_garbage_token(client):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_logout(client, seed_users):
    headers = auth_headers(client, "admin@storyslip.dev")
    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200
