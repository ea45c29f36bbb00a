# ============================================================================
# BLOG SCHEMA
# ============================================================================
# Pydantic classes for validating blog posts coming in (JSON or form fields)
# and for shaping rows going out of the blogs table.
# ============================================================================

from schemas.imports import *


class BlogBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    @field_validator("tags", mode="before", check_fields=False)
    @classmethod
    def _split_tags(cls, value):
        return split_csv(value)


class BlogCreate(BlogBase):
    title: str = Field(..., min_length=1, max_length=200)
    excerpt: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    read_time: int = Field(5, ge=1, validation_alias=AliasChoices("readTime", "read_time"))
    is_published: bool = Field(False, validation_alias=AliasChoices("isPublished", "is_published"))
    featured_image_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("featuredImageUrl", "featured_image_url")
    )


class BlogUpdate(BlogBase):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    excerpt: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    read_time: Optional[int] = Field(None, ge=1, validation_alias=AliasChoices("readTime", "read_time"))
    is_published: Optional[bool] = Field(None, validation_alias=AliasChoices("isPublished", "is_published"))
    featured_image_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("featuredImageUrl", "featured_image_url")
    )


class BlogOut(BaseModel):
    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    featured_image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    read_time: int
    is_published: bool
    published_at: Optional[datetime] = None
    views: int = 0
    author_id: Optional[str] = None
    author: Optional[AuthorOut] = None
    created_at: datetime
    updated_at: datetime
