def test_register_and_login(client):
    r = client.post("/api/auth/register", json={"email": "ann@example.com", "password": "pw"})
    assert r.status_code == 200
    assert r.json() == {"message": "Registration successful."}

    r = client.post("/api/auth/login", json={"email": "ann@example.com", "password": "pw"})
    body = r.json()
    assert r.status_code == 200
    assert body["role"] == "User"
    assert body["token"] and body["refresh_token"]


def test_duplicate_registration_conflicts(client):
    client.post("/api/auth/register", json={"email": "ann@example.com", "password": "pw"})
    r = client.post("/api/auth/register", json={"email": "ann@example.com", "password": "other"})
    assert r.status_code == 409


def test_blank_or_invalid_registration_is_bad_request(client):
    assert client.post("/api/auth/register", json={"email": "ann@example.com", "password": " "}).status_code == 400
    r = client.post("/api/auth/register", json={"email": "x@example.com", "password": "pw", "role": "Root"})
    assert r.status_code == 400


def test_login_with_bad_credentials(client, user_tokens):
    assert client.post("/api/auth/login", json={"email": "user@example.com", "password": "nope"}).status_code == 401
    assert client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "pw"}).status_code == 401


def test_current_user(client, user_headers):
    r = client.get("/api/auth/user", headers=user_headers)
    assert r.status_code == 200
    assert r.json() == {"email": "user@example.com", "role": "User"}


def test_current_user_requires_token(client):
    assert client.get("/api/auth/user").status_code == 401
    assert client.get("/api/auth/user", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_refresh_rotates_and_rejects_reuse(client, user_tokens):
    old = user_tokens["refresh_token"]
    r = client.post("/api/auth/refresh", json={"refresh_token": old})
    assert r.status_code == 200
    assert r.json()["refresh_token"] != old

    r = client.post("/api/auth/refresh", json={"refresh_token": old})
    assert r.status_code == 401


def test_logout_revokes_refresh_token(client, user_tokens, user_headers):
    refresh = user_tokens["refresh_token"]
    r = client.post("/api/auth/logout", json={"refresh_token": refresh}, headers=user_headers)
    assert r.status_code == 200
    assert client.post("/api/auth/refresh", json={"refresh_token": refresh}).status_code == 401
    assert client.post("/api/auth/revoke", json={"refresh_token": refresh}).status_code == 200


def test_user_cannot_reach_admin_routes(client, user_headers):
    assert client.get("/api/admin/users", headers=user_headers).status_code == 403
    assert client.get("/api/v1/survey", headers=user_headers).status_code == 403


def test_admin_user_management(client, admin_headers, user_tokens):
    users = client.get("/api/admin/users", headers=admin_headers).json()
    user_id = next(u["id"] for u in users if u["email"] == "user@example.com")

    assert client.post(f"/api/admin/users/{user_id}/promote", headers=admin_headers).status_code == 200
    assert client.post("/api/admin/users/999/promote", headers=admin_headers).status_code == 404

    assert client.delete(f"/api/admin/users/{user_id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/admin/users/{user_id}", headers=admin_headers).status_code == 404


def test_malformed_email_is_rejected(client):
    assert client.post("/api/auth/register", json={"email": "not-an-email", "password": "pw"}).status_code == 422
    assert client.post("/api/auth/login", json={"email": " ", "password": "pw"}).status_code == 422
