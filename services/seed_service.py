# ============================================================================
# SEED SERVICE
# ============================================================================
# Inserts the default marketing-page sections when they are missing. Existing
# rows are never touched, so running it on every startup is safe.
# ============================================================================

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from core.database import Database
from repositories.resource import create_row, get_row
from repositories.tables import Section
from repositories.user import get_first_user


logger = logging.getLogger(__name__)


DEFAULT_SECTIONS: list[dict[str, Any]] = [
    {
        "name": "hero-section",
        "title": "Building Digital Products",
        "content": (
            "From concept to deployment - I craft high-performance web apps, Android applications, "
            "and SEO-optimized websites that drive real business results."
        ),
        "order": 1,
        "metadata": {"tagline": "Startup Founder & Full-Stack Developer"},
    },
    {
        "name": "vision-section",
        "title": (
            "Great products aren't built in isolation they're crafted through code, strategy, "
            "and relentless iteration."
        ),
        "content": (
            "As a founder who codes, I bridge the gap between vision and execution. At my company "
            "RanStack Solutions, I don't just manage development I build it. From writing the first "
            "line of code to deploying at scale, I'm hands-on in creating products that solve real "
            "problems and drive measurable growth."
        ),
        "order": 2,
        "metadata": {
            "projectsCount": 50,
            "codeCount": 100000,
            "startupsCount": 3,
            "companyName": "RanStack Solutions",
            "companyUrl": "http://www.ranstacksolutions.com",
        },
    },
    {
        "name": "expertise-section",
        "title": "Technical Expertise",
        "content": (
            "From ideation to deployment, I handle every aspect of building digital products that "
            "scale and perform."
        ),
        "order": 3,
        "metadata": {
            "expertiseAreas": [
                {
                    "iconName": "Globe",
                    "title": "Web Development",
                    "description": (
                        "Full-stack web applications using modern frameworks like React, Node.js, "
                        "and cloud platforms."
                    ),
                },
                {
                    "iconName": "Smartphone",
                    "title": "Mobile Development",
                    "description": "Native Android applications and cross-platform solutions with React Native.",
                },
                {
                    "iconName": "TrendingUp",
                    "title": "SEO & Performance",
                    "description": (
                        "Search engine optimization and performance tuning for maximum visibility and speed."
                    ),
                },
                {
                    "iconName": "Code",
                    "title": "Custom Solutions",
                    "description": "Tailored software solutions designed to meet specific business requirements.",
                },
            ]
        },
    },
    {
        "name": "projects-section",
        "title": "Featured Projects",
        "content": (
            "Real-world applications and successful campaigns - from MVPs to production-ready "
            "platforms serving thousands of users."
        ),
        "order": 4,
        "metadata": {},
    },
    {
        "name": "achievements-section",
        "title": "Skills & Technologies",
        "content": "Modern tech stack and proven methodologies for building scalable digital products.",
        "order": 5,
        "metadata": {},
    },
    {
        "name": "blogs-section",
        "title": "Latest Blogs",
        "content": (
            "Insights, tutorials, and thoughts on web development, technology, and software engineering."
        ),
        "order": 6,
        "metadata": {},
    },
    {
        "name": "contact-section",
        "title": "Let's Build Together",
        "content": (
            "Have a project in mind...? Need a technical co-founder or full-stack developer...? "
            "Let's discuss how we can bring your vision to life from initial concept to live deployment."
        ),
        "order": 7,
        "metadata": {
            "email": "manjuhallegowda@gmail.com",
            "additionalInfo": "On-Site/Remote, global availability. Open for freelance & equity partnerships",
            "socialLinks": [
                {
                    "platform": "LinkedIn",
                    "url": "https://www.linkedin.com/in/manjuhallegowda/",
                    "iconName": "Linkedin",
                },
                {
                    "platform": "Twitter",
                    "url": "https://www.twitter.com/in/manjuhallegowda/",
                    "iconName": "Twitter",
                },
                {
                    "platform": "Instagram",
                    "url": "https://www.instagram.com/manju_halleygowda/",
                    "iconName": "Instagram",
                },
            ],
        },
    },
]


def _section_row(section: dict[str, Any], author_id: str) -> dict[str, Any]:
    return {
        "name": section["name"],
        "page": "home",
        "title": section["title"],
        "subtitle": "",
        "content": section["content"],
        "images": [],
        "videos": [],
        "links": [],
        "order": section["order"],
        "is_published": True,
        "metadata_": section["metadata"],
        "author_id": author_id,
    }


async def seed_default_sections(database: Database) -> list[str]:
    """Returns the names of the sections inserted by this run."""
    async with database.session() as session:
        author = await get_first_user(session)
        if author is None:
            logger.info("No users found in the database. Skipping section seeding.")
            return []
        author_id = author.id

    inserted: list[str] = []
    for section in DEFAULT_SECTIONS:
        name = section["name"]
        try:
            async with database.session() as session:
                if await get_row(session, Section, name=name) is not None:
                    logger.debug("Section %s already exists. Skipping.", name)
                    continue
                await create_row(session, Section, _section_row(section, author_id))
        except SQLAlchemyError:
            logger.exception("Error seeding section %s", name)
            continue
        inserted.append(name)
        logger.info("Seeded section: %s", name)
    return inserted
