import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit) if limit else 0)


class APIResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint: {success, data?, message?, pagination?}."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    pagination: Optional[Pagination] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[str]] = None


class ListQuery(BaseModel):
    page: int = Field(1, ge=1)
    limit: Optional[int] = Field(None, ge=1, le=100)
    search: Optional[str] = None
    tag: Optional[str] = None
    category: Optional[str] = None

    def with_default_limit(self, default: int) -> "ListQuery":
        if self.limit is not None:
            return self
        return self.model_copy(update={"limit": default})

    @property
    def range_from(self) -> int:
        return (self.page - 1) * (self.limit or 10)

    @property
    def range_to(self) -> int:
        return self.page * (self.limit or 10) - 1
