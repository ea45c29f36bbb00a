import json

from fastapi.testclient import TestClient

from core.config import Settings, load_settings
from core.middleware import RateLimitMiddleware
from main import create_app


def build_client(tmp_path, identity, storage, **overrides):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'app.db'}",
        seed_on_startup=False,
        **overrides,
    )
    return TestClient(create_app(settings, identity=identity, storage=storage))


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "Server is running"}


def test_unknown_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found"}


def test_security_headers(client):
    headers = client.get("/api/health").headers
    assert headers["X-Content-Type-Options"] == "nosniff"
    assert headers["X-Frame-Options"] == "SAMEORIGIN"


def test_cors_allows_configured_origin(tmp_path, identity, storage):
    with build_client(tmp_path, identity, storage, cors_origins=["https://site.example.com"]) as client:
        response = client.get("/api/health", headers={"Origin": "https://site.example.com"})
        assert response.headers["access-control-allow-origin"] == "https://site.example.com"


def test_rate_limit(tmp_path, identity, storage):
    with build_client(tmp_path, identity, storage, rate_limit_max=2) as client:
        assert client.get("/api/health").headers["RateLimit-Remaining"] == "1"
        assert client.get("/api/health").status_code == 200
        response = client.get("/api/health")
        assert response.status_code == 429
        assert response.json() == {"success": False, "message": "Too many requests, please try again later."}
        assert "Retry-After" in response.headers


def test_body_size_limit(tmp_path, identity, storage):
    with build_client(tmp_path, identity, storage, max_body_bytes=64) as client:
        response = client.post("/api/contact", content=b"x" * 65, headers={"Content-Type": "application/json"})
        assert response.status_code == 413
        assert response.json()["message"] == "Request body too large"


def test_seed_runs_on_startup(tmp_path, identity, storage):
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'seeded.db'}", seed_on_startup=False)
    with TestClient(create_app(settings, identity=identity, storage=storage)) as client:
        client.post("/api/admin/setup", json={"email": "owner@example.com", "password": "pw"})

    settings.seed_on_startup = True
    with TestClient(create_app(settings, identity=identity, storage=storage)) as client:
        assert client.get("/api/sections/hero-section").status_code == 200
        assert len(client.get("/api/sections").json()["data"]) == 7


def test_uploads_fail_cleanly_without_storage(tmp_path, identity):
    with build_client(tmp_path, identity, None) as client:
        client.post("/api/admin/setup", json={"email": "owner@example.com", "password": "pw"})
        identity.issue("owner-token", identity.users["owner@example.com"].uid, "owner@example.com")
        response = client.post(
            "/api/blogs",
            data={"title": "T", "excerpt": "e", "content": "c"},
            files={"featuredImage": ("a.png", b"\x89PNG", "image/png")},
            headers={"Authorization": "Bearer owner-token"},
        )
        assert response.status_code == 500
        assert response.json()["message"] == "Cloudflare R2 environment variables not configured"


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")
    monkeypatch.setenv("RATE_LIMIT_MAX", "5")
    monkeypatch.setenv("SEED_ON_STARTUP", "false")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com")
    for name in ("R2_ACCOUNT_ID", "R2_ACCESS_KEY_ID", "R2_SECRET_ACCESS_KEY", "R2_BUCKET_NAME", "R2_PUBLIC_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("core.config.load_dotenv", lambda: None)

    settings = load_settings()
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"
    assert settings.rate_limit_max == 5
    assert settings.seed_on_startup is False
    assert settings.r2 is None
    assert settings.allowed_origins() == ["https://a.example.com", "https://b.example.com"]


def _chunks(total, size=250):
    payload = json.dumps(
        {"name": "Big", "email": "big@example.com", "subject": "S", "message": "m" * total}
    ).encode()
    for start in range(0, len(payload), size):
        yield payload[start:start + size]


def test_chunked_body_over_the_cap_is_refused(tmp_path, identity, storage):
    with build_client(tmp_path, identity, storage, max_body_bytes=1000) as client:
        response = client.post("/api/contact", content=_chunks(5000), headers={"Content-Type": "application/json"})
        assert response.status_code == 413
        assert response.json() == {"success": False, "message": "Request body too large"}


def test_chunked_body_under_the_cap_reaches_the_route(tmp_path, identity, storage):
    with build_client(tmp_path, identity, storage, max_body_bytes=1000) as client:
        response = client.post("/api/contact", content=_chunks(100), headers={"Content-Type": "application/json"})
        assert response.status_code == 201
        assert response.json()["data"]["name"] == "Big"


def test_unexpected_errors_keep_cors_and_security_headers(tmp_path, identity, storage, monkeypatch):
    async def broken_count(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("services.resource_service.count_rows", broken_count)
    with build_client(tmp_path, identity, storage) as client:
        response = client.get("/api/blogs", headers={"Origin": "http://localhost:8080"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Something went wrong!"}
    assert response.headers["access-control-allow-origin"] == "http://localhost:8080"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_rate_limit_windows_are_swept():
    now = [0.0]
    limiter = RateLimitMiddleware(app=None, max_requests=5, window_seconds=60, clock=lambda: now[0])

    limiter._hit("10.0.0.1")
    limiter._hit("10.0.0.2")
    assert set(limiter._windows) == {"10.0.0.1", "10.0.0.2"}

    now[0] = 61.0
    allowed, remaining, _ = limiter._hit("10.0.0.3")
    assert allowed is True
    assert remaining == 4
    assert set(limiter._windows) == {"10.0.0.3"}
