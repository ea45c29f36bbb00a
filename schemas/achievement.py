from schemas.imports import *


class AchievementBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    @field_validator("items", mode="before", check_fields=False)
    @classmethod
    def _split_items(cls, value):
        return split_csv(value)


class AchievementCreate(AchievementBase):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    items: List[str] = Field(default_factory=list)
    icon: AchievementIcon = AchievementIcon.AWARD
    category: AchievementCategory = AchievementCategory.SKILLS
    order: int = 0
    is_published: bool = Field(False, validation_alias=AliasChoices("isPublished", "is_published"))


class AchievementUpdate(AchievementBase):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    items: Optional[List[str]] = None
    icon: Optional[AchievementIcon] = None
    category: Optional[AchievementCategory] = None
    order: Optional[int] = None
    is_published: Optional[bool] = Field(None, validation_alias=AliasChoices("isPublished", "is_published"))


class AchievementOut(BaseModel):
    id: str
    title: str
    description: str
    items: List[str] = Field(default_factory=list)
    icon: str
    category: str
    order: int
    is_published: bool
    author_id: Optional[str] = None
    author: Optional[AuthorOut] = None
    created_at: datetime
    updated_at: datetime
