# ============================================================================
# PROJECT SCHEMA
# ============================================================================

from urllib.parse import urlparse

from schemas.imports import *


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("must be a valid http(s) URL")
    return value


class ProjectBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    @field_validator("technologies", mode="before", check_fields=False)
    @classmethod
    def _split_technologies(cls, value):
        return split_csv(value)

    @field_validator("demo_url", "github_url", check_fields=False)
    @classmethod
    def _valid_url(cls, value):
        return _check_url(value)


class ProjectCreate(ProjectBase):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    long_description: Optional[str] = Field(
        None, validation_alias=AliasChoices("longDescription", "long_description")
    )
    technologies: List[str] = Field(default_factory=list)
    category: str = Field("web", min_length=1, max_length=50)
    demo_url: Optional[str] = Field(None, validation_alias=AliasChoices("demoUrl", "liveUrl", "demo_url"))
    github_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("githubUrl", "sourceUrl", "github_url", "source_url")
    )
    status: str = Field("completed", min_length=1, max_length=50)
    is_featured: bool = Field(False, validation_alias=AliasChoices("isFeatured", "is_featured"))
    is_published: bool = Field(False, validation_alias=AliasChoices("isPublished", "is_published"))
    order: int = 0
    featured_image_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("featuredImageUrl", "featured_image_url")
    )


class ProjectUpdate(ProjectBase):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    long_description: Optional[str] = Field(
        None, validation_alias=AliasChoices("longDescription", "long_description")
    )
    technologies: Optional[List[str]] = None
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    demo_url: Optional[str] = Field(None, validation_alias=AliasChoices("demoUrl", "liveUrl", "demo_url"))
    github_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("githubUrl", "sourceUrl", "github_url", "source_url")
    )
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    is_featured: Optional[bool] = Field(None, validation_alias=AliasChoices("isFeatured", "is_featured"))
    is_published: Optional[bool] = Field(None, validation_alias=AliasChoices("isPublished", "is_published"))
    order: Optional[int] = None
    featured_image_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("featuredImageUrl", "featured_image_url")
    )


class ProjectOut(BaseModel):
    id: str
    title: str
    slug: str
    description: str
    long_description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    category: str
    featured_image_url: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    demo_url: Optional[str] = None
    github_url: Optional[str] = None
    status: str
    is_featured: bool
    is_published: bool
    order: int
    author_id: Optional[str] = None
    author: Optional[AuthorOut] = None
    created_at: datetime
    updated_at: datetime
