# ============================================================================
# PORTFOLIO API CLIENT
# ============================================================================
# Thin async wrapper over the REST API. Every call unwraps the
# {success, data, message, pagination} envelope and raises APIError with the
# server's message when a request fails.
# ============================================================================

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000"

RESOURCE_PATHS = {
    "blogs": "/api/blogs",
    "projects": "/api/projects",
    "achievements": "/api/achievements",
    "sections": "/api/sections",
    "contacts": "/api/contact",
}


class APIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass
class RequestBody:
    """A request body ready to send: JSON, or form fields plus files for multipart."""

    json: Optional[Dict[str, Any]] = None
    data: Optional[Dict[str, Any]] = None
    files: List[Tuple[str, Tuple[str, bytes, str]]] = field(default_factory=list)

    @property
    def is_multipart(self) -> bool:
        return bool(self.files)

    def as_kwargs(self) -> Dict[str, Any]:
        if self.is_multipart:
            return {"data": self.data or {}, "files": self.files}
        return {"json": self.json if self.json is not None else {}}


@dataclass
class Page:
    items: List[Dict[str, Any]]
    pagination: Optional[Dict[str, Any]] = None

    @property
    def total(self) -> int:
        if self.pagination:
            return int(self.pagination.get("total", len(self.items)))
        return len(self.items)

    @property
    def has_more(self) -> bool:
        if not self.pagination:
            return False
        return self.pagination["page"] * self.pagination["limit"] < self.pagination["total"]


class PortfolioAPIClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or os.getenv("PORTFOLIO_API_URL") or DEFAULT_API_URL).rstrip("/")
        self.token = token
        self._http = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def __aenter__(self) -> "PortfolioAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        response = await self._http.request(method, path, headers=self._headers(), **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.is_error or payload.get("success") is False:
            message = payload.get("message") or f"HTTP error! status: {response.status_code}"
            raise APIError(response.status_code, message)
        return payload

    async def _page(self, path: str, params: Optional[Dict[str, Any]] = None) -> Page:
        clean = {key: value for key, value in (params or {}).items() if value is not None}
        payload = await self.request("GET", path, params=clean)
        return Page(items=payload.get("data") or [], pagination=payload.get("pagination"))

    # ------------------------------
    # Public reads
    # ------------------------------
    async def health(self) -> Dict[str, Any]:
        return await self.request("GET", "/api/health")

    async def get_section(self, name: str) -> Dict[str, Any]:
        payload = await self.request("GET", f"/api/sections/{name}")
        return payload.get("data") or {}

    async def list_blogs(self, page: int = 1, limit: Optional[int] = None, search: Optional[str] = None, tag: Optional[str] = None) -> Page:
        return await self._page("/api/blogs", {"page": page, "limit": limit, "search": search, "tag": tag})

    async def get_blog(self, slug: str) -> Dict[str, Any]:
        payload = await self.request("GET", f"/api/blogs/{slug}")
        return payload["data"]

    async def list_projects(self, page: int = 1, limit: Optional[int] = None, category: Optional[str] = None) -> Page:
        return await self._page("/api/projects", {"page": page, "limit": limit, "category": category})

    async def get_project(self, slug: str) -> Dict[str, Any]:
        payload = await self.request("GET", f"/api/projects/{slug}")
        return payload["data"]

    async def list_achievements(self, category: Optional[str] = None, limit: Optional[int] = None) -> Page:
        return await self._page("/api/achievements", {"category": category, "limit": limit})

    async def submit_contact(self, name: str, email: str, subject: str, message: str) -> Dict[str, Any]:
        payload = await self.request(
            "POST",
            "/api/contact",
            json={"name": name, "email": email, "subject": subject, "message": message},
        )
        return payload["data"]

    # ------------------------------
    # Auth
    # ------------------------------
    async def login(self, id_token: str) -> Dict[str, Any]:
        payload = await self.request("POST", "/api/auth/login", json={"token": id_token})
        return payload["user"]

    async def me(self) -> Dict[str, Any]:
        payload = await self.request("GET", "/api/auth/me")
        return payload["user"]

    async def logout(self) -> None:
        await self.request("POST", "/api/auth/logout")

    # ------------------------------
    # Admin
    # ------------------------------
    async def dashboard(self) -> Dict[str, Any]:
        payload = await self.request("GET", "/api/admin/dashboard")
        return payload["data"]

    async def admin_list(self, resource: str, page: int = 1, limit: Optional[int] = None) -> Page:
        path = RESOURCE_PATHS[resource]
        if resource != "contacts":
            path = f"{path}/admin/all"
        return await self._page(path, {"page": page, "limit": limit})

    async def create(self, resource: str, body: RequestBody) -> Dict[str, Any]:
        payload = await self.request("POST", RESOURCE_PATHS[resource], **body.as_kwargs())
        return payload["data"]

    async def update(self, resource: str, item_id: str, body: RequestBody) -> Dict[str, Any]:
        payload = await self.request("PUT", f"{RESOURCE_PATHS[resource]}/{item_id}", **body.as_kwargs())
        return payload["data"]

    async def delete(self, resource: str, item_id: str) -> str:
        payload = await self.request("DELETE", f"{RESOURCE_PATHS[resource]}/{item_id}")
        return payload.get("message", "")

    async def reply_contact(self, contact_id: str, reply_message: str) -> Dict[str, Any]:
        payload = await self.request(
            "POST", f"/api/contact/{contact_id}/reply", json={"reply_message": reply_message}
        )
        return payload["data"]

    async def list_users(self, page: int = 1, limit: Optional[int] = None) -> Page:
        return await self._page("/api/admin/users", {"page": page, "limit": limit})

    async def set_user_role(self, user_id: str, role: str) -> Dict[str, Any]:
        payload = await self.request("PUT", f"/api/admin/users/{user_id}/role", json={"role": role})
        return payload["data"]

    async def delete_user(self, user_id: str) -> None:
        await self.request("DELETE", f"/api/admin/users/{user_id}")
