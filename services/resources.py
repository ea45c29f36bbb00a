# ============================================================================
# RESOURCE CONFIGURATIONS
# ============================================================================
# Per-entity settings for the generic resource service and router.
# ============================================================================

from repositories.tables import Achievement, Blog, Contact, Project, Section
from schemas.achievement import AchievementCreate, AchievementOut, AchievementUpdate
from schemas.blog import BlogCreate, BlogOut, BlogUpdate
from schemas.contact import ContactCreate, ContactOut, ContactUpdate
from schemas.project import ProjectCreate, ProjectOut, ProjectUpdate
from schemas.section import SectionCreate, SectionOut, SectionUpdate
from services.resource_service import ResourceConfig


BLOGS = ResourceConfig(
    name="blogs",
    label="Blog",
    model=Blog,
    create_schema=BlogCreate,
    update_schema=BlogUpdate,
    out_schema=BlogOut,
    public_order=lambda: [Blog.published_at.desc()],
    admin_order=lambda: [Blog.created_at.desc()],
    lookup_field="slug",
    slug_source="title",
    search_columns=("title", "excerpt", "content"),
    tag_column="tags",
    storage_folder="portfolio/blogs",
    featured_image=True,
    tracks_published_at=True,
    counts_views=True,
)

PROJECTS = ResourceConfig(
    name="projects",
    label="Project",
    model=Project,
    create_schema=ProjectCreate,
    update_schema=ProjectUpdate,
    out_schema=ProjectOut,
    public_order=lambda: [Project.order.asc(), Project.created_at.desc()],
    admin_order=lambda: [Project.created_at.desc()],
    lookup_field="slug",
    slug_source="title",
    search_columns=("title", "description"),
    filter_columns={"category": "category"},
    storage_folder="portfolio/projects",
    featured_image=True,
    gallery=True,
    default_limit=12,
)

ACHIEVEMENTS = ResourceConfig(
    name="achievements",
    label="Achievement",
    model=Achievement,
    create_schema=AchievementCreate,
    update_schema=AchievementUpdate,
    out_schema=AchievementOut,
    public_order=lambda: [Achievement.order.asc(), Achievement.created_at.desc()],
    admin_order=lambda: [Achievement.order.asc(), Achievement.created_at.desc()],
    filter_columns={"category": "category"},
    default_limit=50,
)

SECTIONS = ResourceConfig(
    name="sections",
    label="Section",
    model=Section,
    create_schema=SectionCreate,
    update_schema=SectionUpdate,
    out_schema=SectionOut,
    public_order=lambda: [Section.order.asc()],
    admin_order=lambda: [Section.order.asc()],
    lookup_field="name",
    unique_fields=("name",),
    column_map={"metadata": "metadata_"},
    default_limit=50,
)

CONTACTS = ResourceConfig(
    name="contacts",
    label="Contact message",
    model=Contact,
    create_schema=ContactCreate,
    update_schema=ContactUpdate,
    out_schema=ContactOut,
    public_order=lambda: [Contact.created_at.desc()],
    admin_order=lambda: [Contact.created_at.desc()],
    has_author=False,
    publishable=False,
)
