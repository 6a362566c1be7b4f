import pytest


def _register(client, username="alice", email=None, password="Secret123"):
    return client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
            "full_name": username.title(),
        },
    )


def _auth_headers(client, username="alice"):
    body = _register(client, username).json()
    return {"Authorization": f"Bearer {body['data']['token']}"}, body["data"]["user_id"]


def test_health_uses_envelope(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["errors"] == []
    assert body["data"]["status"] == "ok"
    assert body["data"]["storage_backend"] == "json"
    assert "X-Correlation-ID" in r.headers


def test_correlation_id_is_echoed(client):
    r = client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})
    assert r.headers["X-Correlation-ID"] == "abc-123"


def test_register_login_and_me(client):
    r = _register(client)
    assert r.status_code == 200
    assert r.json()["data"]["user_id"] == 1

    dup = _register(client)
    assert dup.status_code == 400
    assert dup.json()["success"] is False

    bad = client.post("/api/auth/login", json={"username": "alice", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["success"] is False

    ok = client.post("/api/auth/login", json={"username": "alice", "password": "Secret123"})
    assert ok.status_code == 200
    token = ok.json()["data"]["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["username"] == "alice"
    assert "password_hash" not in me.json()["data"]


def test_me_requires_valid_token(client):
    assert client.get("/api/auth/me").status_code == 401
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Invalid token", "data": None, "errors": []}


def test_validation_errors_list_fields(client):
    r = client.post("/api/auth/register", json={"username": "al", "email": "nope", "password": "1"})
    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    fields = {e.split(":")[0] for e in body["errors"]}
    assert {"username", "email", "password"} <= fields


def test_skill_crud_over_http(client):
    headers, user_id = _auth_headers(client)

    assert client.post("/api/skills", json={"name": "Python"}).status_code == 401

    created = client.post("/api/skills", json={"name": "Python", "level": "Expert"}, headers=headers)
    assert created.status_code == 201
    skill = created.json()["data"]
    assert skill["user_id"] == user_id
    assert skill["level"] == "Expert"

    listed = client.get(f"/api/skills/user/{user_id}").json()["data"]
    assert [s["name"] for s in listed] == ["Python"]

    updated = client.put(f"/api/skills/{skill['id']}", json={"category": "Backend"}, headers=headers)
    assert updated.json()["data"]["category"] == "Backend"
    assert updated.json()["data"]["name"] == "Python"

    public = client.get(f"/api/skills/user/{user_id}/public").json()["data"]
    assert len(public) == 1
    by_category = client.get(f"/api/skills/user/{user_id}/category/Backend").json()["data"]
    assert len(by_category) == 1

    assert client.delete(f"/api/skills/{skill['id']}", headers=headers).status_code == 200
    missing = client.get(f"/api/skills/{skill['id']}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Skill not found"
    assert client.put(f"/api/skills/{skill['id']}", json={}, headers=headers).status_code == 404


def test_planner_reads_need_a_token(client):
    headers, user_id = _auth_headers(client)
    assert client.get("/api/todoitems").status_code == 401
    assert client.get(f"/api/worktasks/user/{user_id}").status_code == 401

    client.post("/api/todoitems", json={"title": "buy milk"}, headers=headers)
    todos = client.get(f"/api/todoitems/user/{user_id}/status/Pending", headers=headers)
    assert todos.status_code == 200
    assert [t["title"] for t in todos.json()["data"]] == ["buy milk"]

    bad_status = client.get(f"/api/todoitems/user/{user_id}/status/Sleeping", headers=headers)
    assert bad_status.status_code == 422


def test_calendar_range_endpoint(client):
    headers, user_id = _auth_headers(client)
    client.post(
        "/api/calendarevents",
        json={
            "title": "standup",
            "start_time": "2025-03-01T09:00:00Z",
            "end_time": "2025-03-01T09:15:00Z",
            "is_public": True,
        },
        headers=headers,
    )
    r = client.get(
        f"/api/calendarevents/user/{user_id}/range",
        params={"start": "2025-03-01T00:00:00Z", "end": "2025-03-02T00:00:00Z"},
        headers=headers,
    )
    assert r.status_code == 200
    assert [e["title"] for e in r.json()["data"]] == ["standup"]

    public = client.get(f"/api/calendarevents/user/{user_id}/public")
    assert public.status_code == 200
    assert len(public.json()["data"]) == 1


def test_blog_published_and_slug_view_count(client):
    headers, _ = _auth_headers(client)
    client.post("/api/blogposts", json={"title": "Draft Only"}, headers=headers)
    client.post(
        "/api/blogposts", json={"title": "Hello World", "status": "Published"}, headers=headers
    )

    published = client.get("/api/blogposts/published").json()["data"]
    assert [p["slug"] for p in published] == ["hello-world"]

    first = client.get("/api/blogposts/slug/hello-world").json()["data"]
    second = client.get("/api/blogposts/slug/hello-world").json()["data"]
    assert (first["view_count"], second["view_count"]) == (1, 2)
    assert client.get("/api/blogposts/slug/nope").status_code == 404


def test_guestbook_flow(client):
    r = client.post(
        "/api/guestbookentries",
        json={"name": "Visitor", "email": "v@example.com", "message": "Nice site", "target_user_id": 1},
    )
    assert r.status_code == 201
    entry_id = r.json()["data"]["id"]
    assert r.json()["data"]["is_approved"] is False

    assert client.get("/api/guestbookentries").json()["data"] == []
    assert client.get("/api/guestbookentries/all").status_code == 401

    headers, _ = _auth_headers(client)
    assert len(client.get("/api/guestbookentries/all", headers=headers).json()["data"]) == 1

    client.put(f"/api/guestbookentries/{entry_id}", json={"is_approved": True}, headers=headers)
    assert len(client.get("/api/guestbookentries").json()["data"]) == 1
    assert len(client.get("/api/guestbookentries/user/1").json()["data"]) == 1
    assert client.get(f"/api/guestbookentries/{entry_id}").status_code == 200


def test_profile_by_user(client):
    headers, user_id = _auth_headers(client)
    assert client.get(f"/api/profiles/user/{user_id}").status_code == 404
    client.post("/api/profiles", json={"title": "Engineer"}, headers=headers)
    r = client.get(f"/api/profiles/user/{user_id}")
    assert r.status_code == 200
    assert r.json()["data"]["title"] == "Engineer"


def test_users_require_admin_role(client):
    headers, _ = _auth_headers(client)
    assert client.get("/api/users").status_code == 401
    r = client.get("/api/users", headers=headers)
    assert r.status_code == 403
    assert r.json()["message"] == "Insufficient role"


def test_seeded_admin_manages_users(seeded_client):
    login = seeded_client.post("/api/auth/login", json={"username": "admin", "password": "Admin123!"})
    assert login.status_code == 200
    assert login.json()["data"]["role"] == "Admin"
    headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}

    created = seeded_client.post(
        "/api/users",
        json={"username": "dave", "email": "dave@example.com", "password": "Secret123"},
        headers=headers,
    )
    assert created.status_code == 201
    assert "password_hash" not in created.json()["data"]

    names = [u["username"] for u in seeded_client.get("/api/users", headers=headers).json()["data"]]
    assert names == ["admin", "dave"]

    profile = seeded_client.get("/api/profiles/user/1")
    assert profile.status_code == 200


@pytest.mark.parametrize("path", ["/api/nowhere", "/api/skills/0"])
def test_unknown_or_invalid_paths_use_envelope(client, path):
    r = client.get(path)
    assert r.status_code in (404, 422)
    assert r.json()["success"] is False
