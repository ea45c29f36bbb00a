# ============================================================================
# ADMIN EDITORS
# ============================================================================
# Form state for each resource. An editor is pre-filled from an API row with
# from_row() and serialized with to_request(): JSON by default, multipart
# form data as soon as an image file is attached.
# ============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

from client.api import RequestBody


@dataclass
class ImageFile:
    filename: str
    data: bytes
    content_type: str = "image/jpeg"

    def as_upload(self, field_name: str):
        return (field_name, (self.filename, self.data, self.content_type))


def form_value(value: Any) -> str:
    """Flattens a JSON value into the string a multipart field carries."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ", ".join(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def build_body(fields: Dict[str, Any], files: List[tuple]) -> RequestBody:
    # None is sent as JSON null (or an empty form field) so saving an editor can clear a value.
    if not files:
        return RequestBody(json=dict(fields))
    return RequestBody(data={key: form_value(value) for key, value in fields.items()}, files=files)


@dataclass
class BlogEditor:
    resource: ClassVar[str] = "blogs"

    title: str = ""
    excerpt: str = ""
    content: str = ""
    tags: List[str] = field(default_factory=list)
    read_time: int = 5
    is_published: bool = False
    featured_image: Optional[ImageFile] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "BlogEditor":
        return cls(
            title=row.get("title", ""),
            excerpt=row.get("excerpt", ""),
            content=row.get("content", ""),
            tags=list(row.get("tags") or []),
            read_time=row.get("read_time") or 5,
            is_published=bool(row.get("is_published")),
        )

    def to_request(self) -> RequestBody:
        files = [self.featured_image.as_upload("featuredImage")] if self.featured_image else []
        return build_body(
            {
                "title": self.title,
                "excerpt": self.excerpt,
                "content": self.content,
                "tags": self.tags,
                "readTime": self.read_time,
                "isPublished": self.is_published,
            },
            files,
        )


@dataclass
class ProjectEditor:
    resource: ClassVar[str] = "projects"

    title: str = ""
    description: str = ""
    long_description: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    category: str = "web"
    demo_url: Optional[str] = None
    github_url: Optional[str] = None
    status: str = "completed"
    is_featured: bool = False
    is_published: bool = False
    order: int = 0
    featured_image: Optional[ImageFile] = None
    images: List[ImageFile] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ProjectEditor":
        return cls(
            title=row.get("title", ""),
            description=row.get("description", ""),
            long_description=row.get("long_description"),
            technologies=list(row.get("technologies") or []),
            category=row.get("category") or "web",
            demo_url=row.get("demo_url"),
            github_url=row.get("github_url"),
            status=row.get("status") or "completed",
            is_featured=bool(row.get("is_featured")),
            is_published=bool(row.get("is_published")),
            order=row.get("order") or 0,
        )

    def to_request(self) -> RequestBody:
        files = [self.featured_image.as_upload("featuredImage")] if self.featured_image else []
        files.extend(image.as_upload("images") for image in self.images)
        return build_body(
            {
                "title": self.title,
                "description": self.description,
                "longDescription": self.long_description,
                "technologies": self.technologies,
                "category": self.category,
                "demoUrl": self.demo_url,
                "githubUrl": self.github_url,
                "status": self.status,
                "isFeatured": self.is_featured,
                "isPublished": self.is_published,
                "order": self.order,
            },
            files,
        )


@dataclass
class AchievementEditor:
    resource: ClassVar[str] = "achievements"

    title: str = ""
    description: str = ""
    items: List[str] = field(default_factory=list)
    icon: str = "award"
    category: str = "skills"
    order: int = 0
    is_published: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "AchievementEditor":
        return cls(
            title=row.get("title", ""),
            description=row.get("description", ""),
            items=list(row.get("items") or []),
            icon=row.get("icon") or "award",
            category=row.get("category") or "skills",
            order=row.get("order") or 0,
            is_published=bool(row.get("is_published")),
        )

    def to_request(self) -> RequestBody:
        return build_body(
            {
                "title": self.title,
                "description": self.description,
                "items": self.items,
                "icon": self.icon,
                "category": self.category,
                "order": self.order,
                "isPublished": self.is_published,
            },
            [],
        )


@dataclass
class SectionEditor:
    resource: ClassVar[str] = "sections"

    name: str = ""
    page: str = "home"
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    images: List[Dict[str, Any]] = field(default_factory=list)
    videos: List[Dict[str, Any]] = field(default_factory=list)
    links: List[Dict[str, Any]] = field(default_factory=list)
    order: int = 0
    is_published: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SectionEditor":
        return cls(
            name=row.get("name", ""),
            page=row.get("page") or "home",
            title=row.get("title"),
            subtitle=row.get("subtitle"),
            content=row.get("content"),
            images=list(row.get("images") or []),
            videos=list(row.get("videos") or []),
            links=list(row.get("links") or []),
            order=row.get("order") or 0,
            is_published=bool(row.get("is_published", True)),
            metadata=dict(row.get("metadata") or {}),
        )

    def to_request(self) -> RequestBody:
        return build_body(
            {
                "name": self.name,
                "page": self.page,
                "title": self.title,
                "subtitle": self.subtitle,
                "content": self.content,
                "images": self.images,
                "videos": self.videos,
                "links": self.links,
                "order": self.order,
                "isPublished": self.is_published,
                "metadata": self.metadata,
            },
            [],
        )


@dataclass
class ContactEditor:
    """Reply form for a contact message; the message itself is read-only."""

    resource: ClassVar[str] = "contacts"

    contact_id: str
    reply_message: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ContactEditor":
        return cls(contact_id=row["id"], reply_message=row.get("reply_message") or "")

    def to_request(self) -> RequestBody:
        return RequestBody(json={"reply_message": self.reply_message})
