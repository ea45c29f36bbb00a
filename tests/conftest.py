import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app
from services.identity_service import IdentityClaims, IdentityError, IdentityUser
from services.r2_service import StoredObject, build_object_key, build_public_url


ADMIN_EMAIL = "admin@example.com"
ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"
PUBLIC_URL = "https://cdn.example.com"


class FakeIdentity:
    """In-memory identity provider: tokens map straight to claims."""

    def __init__(self):
        self.tokens = {}
        self.users = {}

    def issue(self, token, uid, email=None):
        self.tokens[token] = IdentityClaims(uid=uid, email=email)

    async def verify_token(self, token):
        try:
            return self.tokens[token]
        except KeyError:
            raise IdentityError("invalid token")

    async def create_or_get_user(self, email, password):
        if email not in self.users:
            self.users[email] = IdentityUser(uid=f"uid-{len(self.users) + 1}", email=email)
        return self.users[email]


class FakeStorage:
    def __init__(self, public_url=PUBLIC_URL):
        self.public_url = public_url
        self.uploaded = []
        self.deleted = []
        self._counter = 0

    def key_from_url(self, url):
        prefix = f"{self.public_url}/"
        return url[len(prefix):] if url and url.startswith(prefix) else None

    async def upload(self, file_bytes, filename, content_type, folder="uploads"):
        self._counter += 1
        key = build_object_key(folder, filename, now_ms=self._counter)
        self.uploaded.append(key)
        return StoredObject(key=key, url=build_public_url(self.public_url, key))

    async def delete(self, key):
        self.deleted.append(key)
        return True


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        seed_on_startup=False,
        rate_limit_max=10_000,
    )


@pytest.fixture
def client(settings, identity, storage):
    app = create_app(settings, identity=identity, storage=storage)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client, identity):
    response = client.post("/api/admin/setup", json={"email": ADMIN_EMAIL, "password": "secret-pass"})
    assert response.status_code == 201
    uid = identity.users[ADMIN_EMAIL].uid
    identity.issue(ADMIN_TOKEN, uid, ADMIN_EMAIL)
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers(client, identity):
    identity.issue(USER_TOKEN, "uid-reader", "reader@example.com")
    response = client.post("/api/auth/login", json={"token": USER_TOKEN})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def anyio_backend():
    return "asyncio"
