# ============================================================================
# SECTION SCHEMA
# ============================================================================
# Sections hold the copy for every block of the marketing pages. They are
# addressed by a unique name such as "hero-section".
# ============================================================================

from schemas.imports import *


class SectionImage(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str
    alt: Optional[str] = None


class SectionVideo(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str
    title: Optional[str] = None


class SectionLink(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str
    label: Optional[str] = None


class SectionBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    @field_validator("images", "videos", "links", "metadata", mode="before", check_fields=False)
    @classmethod
    def _parse_json(cls, value):
        return parse_json_field(value)


class SectionCreate(SectionBase):
    name: str = Field(..., min_length=1, max_length=100)
    page: str = Field("home", min_length=1, max_length=50)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    images: List[SectionImage] = Field(default_factory=list)
    videos: List[SectionVideo] = Field(default_factory=list)
    links: List[SectionLink] = Field(default_factory=list)
    order: int = 0
    is_published: bool = Field(True, validation_alias=AliasChoices("isPublished", "is_published"))
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SectionUpdate(SectionBase):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    page: Optional[str] = Field(None, min_length=1, max_length=50)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    images: Optional[List[SectionImage]] = None
    videos: Optional[List[SectionVideo]] = None
    links: Optional[List[SectionLink]] = None
    order: Optional[int] = None
    is_published: Optional[bool] = Field(None, validation_alias=AliasChoices("isPublished", "is_published"))
    metadata: Optional[Dict[str, Any]] = None


class SectionOut(BaseModel):
    id: str
    name: str
    page: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    images: List[Dict[str, Any]] = Field(default_factory=list)
    videos: List[Dict[str, Any]] = Field(default_factory=list)
    links: List[Dict[str, Any]] = Field(default_factory=list)
    order: int
    is_published: bool
    metadata: Dict[str, Any] = Field(default_factory=dict)
    author_id: Optional[str] = None
    author: Optional[AuthorOut] = None
    created_at: datetime
    updated_at: datetime
