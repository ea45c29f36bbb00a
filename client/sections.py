# ============================================================================
# SECTION LOADERS
# ============================================================================
# Each marketing-page block fetches its section row (and, where it shows a
# list, that list) and reports a SectionView. A view starts in "loading",
# ends in "ready" or "error", and always carries usable copy: missing or
# failed fetches fall back to the defaults below.
# ============================================================================

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from client.api import APIError, Page, PortfolioAPIClient


logger = logging.getLogger(__name__)


class SectionState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


FALLBACK_COPY: Dict[str, Dict[str, Any]] = {
    "hero-section": {
        "title": "Building Digital Products",
        "content": "From concept to deployment, web apps, Android applications and SEO-optimized websites.",
        "images": [{"url": "/assets/hero.jpg", "alt": "Hero background"}],
        "metadata": {"tagline": "Startup Founder & Full-Stack Developer"},
    },
    "vision-section": {
        "title": "Great products are crafted through code, strategy, and relentless iteration.",
        "content": "A founder who codes, bridging the gap between vision and execution.",
        "metadata": {"projectsCount": 50, "codeCount": 100000, "startupsCount": 3},
    },
    "expertise-section": {
        "title": "Technical Expertise",
        "content": "Every aspect of building digital products that scale and perform.",
        "metadata": {"expertiseAreas": []},
    },
    "projects-section": {
        "title": "Featured Projects",
        "content": "Real-world applications, from MVPs to production-ready platforms.",
    },
    "achievements-section": {
        "title": "Skills & Technologies",
        "content": "Modern tech stack and proven methodologies for building scalable digital products.",
    },
    "blogs-section": {
        "title": "Latest Blogs",
        "content": "Insights, tutorials, and thoughts on web development and software engineering.",
    },
    "contact-section": {
        "title": "Let's Build Together",
        "content": "Have a project in mind? Let's discuss how to bring your vision to life.",
        "metadata": {
            "socialLinks": [
                {"platform": "LinkedIn", "url": "https://www.linkedin.com/in/manjuhallegowda/", "iconName": "Linkedin"},
                {"platform": "Twitter", "url": "https://www.twitter.com/in/manjuhallegowda/", "iconName": "Twitter"},
                {"platform": "Instagram", "url": "https://www.instagram.com/manju_halleygowda/", "iconName": "Instagram"},
            ]
        },
    },
}


def merge_with_fallback(name: str, section: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Fills empty fields of a fetched section (title, content, metadata keys) from the fallback copy."""
    fallback = FALLBACK_COPY.get(name, {})
    merged: Dict[str, Any] = {"name": name, **fallback}
    for key, value in (section or {}).items():
        if value in (None, "", [], {}):
            continue
        if key == "metadata" and isinstance(value, dict):
            merged["metadata"] = {**fallback.get("metadata", {}), **value}
        else:
            merged[key] = value
    return merged


@dataclass
class SectionView:
    name: str
    state: SectionState = SectionState.LOADING
    section: Dict[str, Any] = field(default_factory=dict)
    items: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0
    error: Optional[str] = None

    @property
    def title(self) -> Optional[str]:
        return self.section.get("title")

    @property
    def content(self) -> Optional[str]:
        return self.section.get("content")

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.section.get("metadata") or {}

    def fail(self, message: str) -> "SectionView":
        self.state = SectionState.ERROR
        self.error = message
        self.section = merge_with_fallback(self.name, self.section)
        return self

    def ready(self, section: Dict[str, Any], page: Optional[Page] = None) -> "SectionView":
        self.state = SectionState.READY
        self.section = merge_with_fallback(self.name, section)
        if page is not None:
            self.items = page.items
            self.total = page.total
        return self


ListLoader = Callable[[PortfolioAPIClient], Awaitable[Page]]


async def load_section(client: PortfolioAPIClient, name: str, list_loader: Optional[ListLoader] = None) -> SectionView:
    view = SectionView(name=name)
    try:
        section = await client.get_section(name)
        page = await list_loader(client) if list_loader else None
    except APIError as exc:
        logger.warning("Loading %s failed: %s", name, exc.message)
        return view.fail(exc.message)
    except httpx.HTTPError as exc:
        logger.warning("Loading %s failed: %s", name, exc)
        return view.fail(f"Failed to load {name}")
    return view.ready(section, page)


async def load_hero(client: PortfolioAPIClient) -> SectionView:
    return await load_section(client, "hero-section")


async def load_vision(client: PortfolioAPIClient) -> SectionView:
    return await load_section(client, "vision-section")


async def load_expertise(client: PortfolioAPIClient) -> SectionView:
    return await load_section(client, "expertise-section")


async def load_projects(client: PortfolioAPIClient, visible: int = 3) -> SectionView:
    return await load_section(client, "projects-section", lambda c: c.list_projects(limit=visible))


async def load_achievements(client: PortfolioAPIClient) -> SectionView:
    return await load_section(client, "achievements-section", lambda c: c.list_achievements())


async def load_blogs(client: PortfolioAPIClient, page: int = 1, limit: int = 6) -> SectionView:
    return await load_section(client, "blogs-section", lambda c: c.list_blogs(page=page, limit=limit))


async def load_contact(client: PortfolioAPIClient) -> SectionView:
    return await load_section(client, "contact-section")


HOME_SECTIONS = (
    load_hero,
    load_vision,
    load_expertise,
    load_projects,
    load_achievements,
    load_blogs,
    load_contact,
)


async def load_home(client: PortfolioAPIClient) -> List[SectionView]:
    """Loads every home-page block concurrently, in page order."""
    return list(await asyncio.gather(*(loader(client) for loader in HOME_SECTIONS)))
