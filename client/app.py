import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from client.api import APIError, PortfolioAPIClient
from client.sections import SectionState, SectionView, load_home


@dataclass
class Route:
    name: str
    params: Dict[str, str] = field(default_factory=dict)


@dataclass
class PageData:
    route: Route
    sections: List[SectionView] = field(default_factory=list)
    blogs: List[Dict[str, Any]] = field(default_factory=list)
    blog: Optional[Dict[str, Any]] = None
    state: SectionState = SectionState.READY
    error: Optional[str] = None


ROUTES = [
    (re.compile(r"^/$"), "index"),
    (re.compile(r"^/blog/?$"), "blog_index"),
    (re.compile(r"^/blog/(?P<slug>[^/]+)/?$"), "blog_page"),
    (re.compile(r"^/admin/?$"), "admin"),
]


def resolve(path: str) -> Route:
    path = path.split("?", 1)[0] or "/"
    for pattern, name in ROUTES:
        match = pattern.match(path)
        if match:
            return Route(name=name, params=match.groupdict())
    return Route(name="not_found")


async def load_page(client: PortfolioAPIClient, path: str) -> PageData:
    """Resolves `path` and fetches what its page shows. The admin page loads nothing until login."""
    route = resolve(path)
    page = PageData(route=route)

    if route.name == "index":
        page.sections = await load_home(client)
    elif route.name == "blog_index":
        try:
            page.blogs = (await client.list_blogs(limit=50)).items
        except APIError as exc:
            page.state, page.error = SectionState.ERROR, exc.message
    elif route.name == "blog_page":
        try:
            page.blog = await client.get_blog(route.params["slug"])
        except APIError as exc:
            page.state, page.error = SectionState.ERROR, exc.message
    return page
