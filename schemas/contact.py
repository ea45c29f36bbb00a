from schemas.imports import *


class ContactCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.lower()


class ContactUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    is_read: Optional[bool] = Field(None, validation_alias=AliasChoices("isRead", "is_read"))


class ContactReply(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    reply_message: str = Field(
        ..., min_length=1, max_length=5000, validation_alias=AliasChoices("replyMessage", "reply_message")
    )


class ContactOut(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    is_read: bool
    is_replied: bool
    reply_message: Optional[str] = None
    replied_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
