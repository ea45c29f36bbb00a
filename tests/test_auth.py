ADMIN_EMAIL = "admin@example.com"


BLOG = {"title": "Guarded", "excerpt": "x", "content": "y"}


def test_missing_token_is_rejected(client):
    response = client.post("/api/blogs", json=BLOG)
    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "message": "Not authorized to access this route (no token provided)",
    }


def test_invalid_token_is_rejected(client):
    response = client.post("/api/blogs", json=BLOG, headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized to access this route (invalid token)"


def test_unregistered_user_is_rejected(client, identity):
    identity.issue("stranger", "uid-stranger", "s@example.com")
    response = client.post("/api/blogs", json=BLOG, headers={"Authorization": "Bearer stranger"})
    assert response.status_code == 401
    assert response.json()["message"] == "User not found or not registered in backend"


def test_non_admin_gets_403(client, user_headers):
    response = client.post("/api/blogs", json=BLOG, headers=user_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "User role user is not authorized to access this route"


def test_login_creates_user_with_user_role(client, identity):
    identity.issue("fresh", "uid-fresh", "fresh@example.com")
    response = client.post("/api/auth/login", json={"token": "fresh"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "fresh@example.com"
    assert body["user"]["role"] == "user"


def test_login_resyncs_changed_email(client, identity):
    identity.issue("t1", "uid-mover", "old@example.com")
    first = client.post("/api/auth/login", json={"token": "t1"}).json()["user"]

    identity.issue("t2", "uid-mover", "new@example.com")
    second = client.post("/api/auth/login", json={"token": "t2"}).json()["user"]

    assert second["id"] == first["id"]
    assert second["email"] == "new@example.com"


def test_login_without_token(client):
    response = client.post("/api/auth/login", json={})
    assert response.status_code == 401
    assert response.json()["message"] == "No Firebase ID token provided"


def test_login_with_invalid_token(client):
    response = client.post("/api/auth/login", json={"token": "forged"})
    assert response.status_code == 401


def test_me_returns_current_user(client, admin_headers):
    response = client.get("/api/auth/me", headers=admin_headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == ADMIN_EMAIL
    assert user["role"] == "admin"
    assert "created_at" in user


def test_logout_is_stateless(client):
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"


def test_optional_auth_never_rejects_public_reads(client):
    response = client.get("/api/blogs", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 200
    assert response.json()["data"] == []
