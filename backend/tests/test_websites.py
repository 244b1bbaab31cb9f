from tests.conftest import auth_headers


def test_create_website_makes_caller_owner(client, seed_users):
    headers = auth_headers(client, "editor@storyslip.dev")
    resp = client.post("/api/websites", json={"name": "Side Project", "domain": "side.example.com"}, headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "owner"
    assert data["owner_id"] == seed_users["editor"].user_id

    listed = client.get("/api/websites", headers=headers)
    assert listed.status_code == 200
    assert [w["website_id"] for w in listed.json()] == [data["website_id"]]


def test_non_member_cannot_see_website(client, seed_website):
    headers = auth_headers(client, "outsider@storyslip.dev")
    resp = client.get(f"/api/websites/{seed_website.website_id}", headers=headers)
    assert resp.status_code == 404


def test_member_sees_own_role(client, seed_website):
    headers = auth_headers(client, "viewer@storyslip.dev")
    resp = client.get(f"/api/websites/{seed_website.website_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["role"] == "viewer"


def test_owner_adds_and_updates_member(client, seed_users, seed_website):
    owner_headers = auth_headers(client, "owner@storyslip.dev")
    add_resp = client.post(
        f"/api/websites/{seed_website.website_id}/members",
        json={"email": "outsider@storyslip.dev", "role": "viewer"},
        headers=owner_headers,
    )
    assert add_resp.status_code == 200
    assert add_resp.json()["role"] == "viewer"

    promote_resp = client.post(
        f"/api/websites/{seed_website.website_id}/members",
        json={"email": "outsider@storyslip.dev", "role": "editor"},
        headers=owner_headers,
    )
    assert promote_resp.status_code == 200
    assert promote_resp.json()["member_id"] == add_resp.json()["member_id"]

    members = client.get(f"/api/websites/{seed_website.website_id}/members", headers=owner_headers).json()
    roles = {m["user_id"]: m["role"] for m in members}
    assert roles[seed_users["outsider"].user_id] == "editor"


def test_editor_cannot_manage_members(client, seed_website):
    headers = auth_headers(client, "editor@storyslip.dev")
    resp = client.post(
        f"/api/websites/{seed_website.website_id}/members",
        json={"email": "outsider@storyslip.dev", "role": "viewer"},
        headers=headers,
    )
    assert resp.status_code == 403


def test_owner_role_cannot_be_reassigned(client, seed_website):
    headers = auth_headers(client, "owner@storyslip.dev")
    resp = client.post(
        f"/api/websites/{seed_website.website_id}/members",
        json={"email": "owner@storyslip.dev", "role": "viewer"},
        headers=headers,
    )
    assert resp.status_code == 400


def test_malformed_website_id_is_rejected(client, seed_users):
    headers = auth_headers(client, "owner@storyslip.dev")
    resp = client.get("/api/websites/not-a-uuid", headers=headers)
    assert resp.status_code == 422
