# ============================================================================
# ADMIN CONSOLE
# ============================================================================
# Session and tab state for the admin dashboard. Sign-in goes through the
# identity provider, then the backend login exchange; only admin accounts
# are let in.
# ============================================================================

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from client.api import APIError, PortfolioAPIClient, RequestBody
from client.editors import AchievementEditor, BlogEditor, ContactEditor, ProjectEditor, SectionEditor
from client.identity import IdentityToolkitClient


logger = logging.getLogger(__name__)

TABS = ("blogs", "projects", "contacts", "achievements", "sections")

Editor = Union[BlogEditor, ProjectEditor, AchievementEditor, SectionEditor]


class AdminAccessError(Exception):
    pass


@dataclass
class ConsoleState:
    user: Optional[Dict[str, Any]] = None
    dashboard: Optional[Dict[str, Any]] = None
    tabs: Dict[str, List[Dict[str, Any]]] = field(default_factory=lambda: {tab: [] for tab in TABS})
    error: Optional[str] = None
    notice: Optional[str] = None


class AdminConsole:
    def __init__(self, api: PortfolioAPIClient, identity: IdentityToolkitClient, page_size: int = 10):
        self.api = api
        self.identity = identity
        self.page_size = page_size
        self.state = ConsoleState()

    @property
    def is_logged_in(self) -> bool:
        return self.state.user is not None

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        session = await self.identity.sign_in(email, password)
        self.api.set_token(session.id_token)
        try:
            user = await self.api.login(session.id_token)
        except APIError as exc:
            # The provider session is useless without a backend user.
            await self._sign_out()
            self.state.error = exc.message
            raise

        if user.get("role") != "admin":
            await self._sign_out()
            self.state.error = "Access denied. Admin privileges required."
            raise AdminAccessError(self.state.error)

        self.state.user = user
        self.state.error = None
        self.state.notice = "Login successful!"
        return user

    async def _sign_out(self) -> None:
        self.identity.sign_out()
        self.api.set_token(None)
        self.state = ConsoleState()

    async def logout(self) -> None:
        try:
            await self.api.logout()
        except APIError as exc:
            logger.warning("Backend logout failed: %s", exc.message)
        await self._sign_out()

    async def refresh(self) -> ConsoleState:
        """Reloads the dashboard and every tab concurrently."""
        dashboard, *pages = await asyncio.gather(
            self.api.dashboard(),
            *(self.api.admin_list(tab, limit=self.page_size) for tab in TABS),
        )
        self.state.dashboard = dashboard
        for tab, page in zip(TABS, pages):
            self.state.tabs[tab] = page.items
        return self.state

    def _find(self, tab: str, item_id: str) -> Dict[str, Any]:
        for row in self.state.tabs[tab]:
            if row["id"] == item_id:
                return row
        raise KeyError(f"{tab} item {item_id} is not loaded")

    def edit(self, tab: str, item_id: str) -> Union[Editor, ContactEditor]:
        row = self._find(tab, item_id)
        editor_cls = {
            "blogs": BlogEditor,
            "projects": ProjectEditor,
            "achievements": AchievementEditor,
            "sections": SectionEditor,
            "contacts": ContactEditor,
        }[tab]
        return editor_cls.from_row(row)

    async def toggle_publish(self, tab: str, item_id: str) -> Dict[str, Any]:
        row = self._find(tab, item_id)
        updated = await self.api.update(tab, item_id, _publish_body(not row.get("is_published")))
        self._replace(tab, updated)
        self.state.notice = f"{tab[:-1].capitalize()} status updated successfully!"
        return updated

    async def save(self, editor: Editor, item_id: Optional[str] = None) -> Dict[str, Any]:
        body = editor.to_request()
        if item_id:
            saved = await self.api.update(editor.resource, item_id, body)
        else:
            saved = await self.api.create(editor.resource, body)
        await self.refresh()
        return saved

    async def delete(self, tab: str, item_id: str) -> str:
        message = await self.api.delete(tab, item_id)
        await self.refresh()
        self.state.notice = message
        return message

    async def reply(self, editor: ContactEditor) -> Dict[str, Any]:
        saved = await self.api.reply_contact(editor.contact_id, editor.reply_message)
        await self.refresh()
        self.state.notice = "Reply sent successfully!"
        return saved

    async def mark_read(self, contact_id: str, is_read: bool = True) -> Dict[str, Any]:
        updated = await self.api.update("contacts", contact_id, RequestBody(json={"isRead": is_read}))
        self._replace("contacts", updated)
        return updated

    def _replace(self, tab: str, updated: Dict[str, Any]) -> None:
        self.state.tabs[tab] = [updated if row["id"] == updated["id"] else row for row in self.state.tabs[tab]]


def _publish_body(is_published: bool):
    return RequestBody(json={"isPublished": is_published})
