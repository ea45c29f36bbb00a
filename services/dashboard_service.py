import asyncio
import logging
from typing import Any, Optional, Sequence, Type

from core.database import Base, Database
from repositories.resource import count_rows, get_rows, row_to_dict
from repositories.tables import Achievement, Blog, Contact, Project, Section, User
from schemas.admin import DashboardOut, DashboardStats, RecentActivity, RecentBlog, RecentContact


logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


async def _count(database: Database, model: Type[Base], where: Optional[Sequence[Any]] = None) -> int:
    # Each count gets its own session so the queries can run concurrently.
    async with database.session() as session:
        return await count_rows(session, model, where or ())


async def _recent(database: Database, model: Type[Base]) -> list[dict[str, Any]]:
    async with database.session() as session:
        rows = await get_rows(session, model, order_by=[model.created_at.desc()], start=0, stop=RECENT_LIMIT - 1)
        return [row_to_dict(row) for row in rows]


async def build_dashboard(database: Database) -> DashboardOut:
    results = await asyncio.gather(
        _count(database, User),
        _count(database, Blog),
        _count(database, Blog, [Blog.is_published.is_(True)]),
        _count(database, Project),
        _count(database, Project, [Project.is_published.is_(True)]),
        _count(database, Contact),
        _count(database, Contact, [Contact.is_read.is_(False)]),
        _count(database, Achievement),
        _count(database, Achievement, [Achievement.is_published.is_(True)]),
        _count(database, Section),
        _count(database, Section, [Section.is_published.is_(True)]),
        _recent(database, Blog),
        _recent(database, Contact),
        return_exceptions=True,
    )
    # Every query has finished by now; surface the first failure.
    for result in results:
        if isinstance(result, BaseException):
            raise result

    (
        total_users,
        total_blogs,
        published_blogs,
        total_projects,
        published_projects,
        total_contacts,
        unread_contacts,
        total_achievements,
        published_achievements,
        total_sections,
        published_sections,
        recent_blogs,
        recent_contacts,
    ) = results

    stats = DashboardStats(
        totalUsers=total_users,
        totalBlogs=total_blogs,
        publishedBlogs=published_blogs,
        totalProjects=total_projects,
        publishedProjects=published_projects,
        totalContacts=total_contacts,
        unreadContacts=unread_contacts,
        totalAchievements=total_achievements,
        publishedAchievements=published_achievements,
        totalSections=total_sections,
        publishedSections=published_sections,
    )
    activity = RecentActivity(
        blogs=[RecentBlog.model_validate(blog) for blog in recent_blogs],
        contacts=[RecentContact.model_validate(contact) for contact in recent_contacts],
    )
    return DashboardOut(stats=stats, recentActivity=activity)
