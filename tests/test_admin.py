from sqlalchemy.exc import SQLAlchemyError


def test_setup_only_once(client, admin_headers):
    response = client.post("/api/admin/setup", json={"email": "second@example.com", "password": "pw"})
    assert response.status_code == 400
    assert response.json()["message"] == "Admin already exists. Use login instead."


def test_setup_requires_credentials(client):
    response = client.post("/api/admin/setup", json={"email": "admin@example.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


def test_setup_promotes_existing_local_user(client, identity):
    identity.issue("early-token", "uid-1", "admin@example.com")
    login = client.post("/api/auth/login", json={"token": "early-token"})
    assert login.json()["user"]["role"] == "user"

    response = client.post("/api/admin/setup", json={"email": "admin@example.com", "password": "pw"})
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["role"] == "admin"
    assert data["id"] == login.json()["user"]["id"]
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer early-token"}).json()["user"]["role"] == "admin"


def test_dashboard_counts_and_recent_activity(client, admin_headers):
    client.post("/api/blogs", json={"title": "Live", "excerpt": "e", "content": "c", "isPublished": True}, headers=admin_headers)
    client.post("/api/blogs", json={"title": "Draft", "excerpt": "e", "content": "c"}, headers=admin_headers)
    client.post("/api/contact", json={"name": "N", "email": "n@example.com", "subject": "S", "message": "M"})

    response = client.get("/api/admin/dashboard", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["stats"] == {
        "totalUsers": 1,
        "totalBlogs": 2,
        "publishedBlogs": 1,
        "totalProjects": 0,
        "publishedProjects": 0,
        "totalContacts": 1,
        "unreadContacts": 1,
        "totalAchievements": 0,
        "publishedAchievements": 0,
        "totalSections": 0,
        "publishedSections": 0,
    }
    assert [blog["title"] for blog in data["recentActivity"]["blogs"]] == ["Draft", "Live"]
    assert data["recentActivity"]["blogs"][0]["author"] == {"email": "admin@example.com"}
    assert data["recentActivity"]["contacts"][0]["subject"] == "S"


def test_dashboard_requires_admin(client, user_headers):
    assert client.get("/api/admin/dashboard", headers=user_headers).status_code == 403


def test_users_listing(client, admin_headers, user_headers):
    body = client.get("/api/admin/users", headers=admin_headers).json()
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 2, "pages": 1}
    assert {user["role"] for user in body["data"]} == {"admin", "user"}


def _user_id(client, headers, role):
    users = client.get("/api/admin/users", headers=headers).json()["data"]
    return next(user["id"] for user in users if user["role"] == role)


def test_role_update(client, admin_headers, user_headers):
    reader_id = _user_id(client, admin_headers, "user")

    bad = client.put(f"/api/admin/users/{reader_id}/role", json={"role": "owner"}, headers=admin_headers)
    assert bad.status_code == 400

    promoted = client.put(f"/api/admin/users/{reader_id}/role", json={"role": "admin"}, headers=admin_headers)
    assert promoted.json()["data"]["role"] == "admin"

    missing = client.put("/api/admin/users/unknown/role", json={"role": "user"}, headers=admin_headers)
    assert missing.status_code == 404


def test_last_admin_cannot_be_removed_or_demoted(client, admin_headers):
    admin_id = _user_id(client, admin_headers, "admin")

    delete = client.delete(f"/api/admin/users/{admin_id}", headers=admin_headers)
    assert delete.status_code == 400
    assert delete.json()["message"] == "Cannot delete the last admin user"

    demote = client.put(f"/api/admin/users/{admin_id}/role", json={"role": "user"}, headers=admin_headers)
    assert demote.status_code == 400

    assert client.get("/api/auth/me", headers=admin_headers).json()["user"]["role"] == "admin"


def test_admin_can_be_deleted_when_another_exists(client, admin_headers, user_headers):
    reader_id = _user_id(client, admin_headers, "user")
    client.put(f"/api/admin/users/{reader_id}/role", json={"role": "admin"}, headers=admin_headers)

    response = client.delete(f"/api/admin/users/{reader_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "User deleted successfully"


def test_dashboard_database_failure(client, admin_headers, monkeypatch):
    async def failing_count(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr("services.dashboard_service.count_rows", failing_count)
    response = client.get("/api/admin/dashboard", headers=admin_headers)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Database error fetching counts"}
