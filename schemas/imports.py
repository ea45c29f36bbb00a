import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class AchievementIcon(str, Enum):
    AWARD = "award"
    BRIEFCASE = "briefcase"
    GLOBE = "globe"
    TRENDING_UP = "trending-up"
    CODE = "code"
    USERS = "users"
    STAR = "star"
    TARGET = "target"
    CLOUD = "cloud"
    PALETTE = "palette"
    SETTINGS = "settings"


class AchievementCategory(str, Enum):
    SKILLS = "skills"
    EXPERIENCE = "experience"
    ACHIEVEMENTS = "achievements"
    CERTIFICATIONS = "certifications"
    OTHER = "other"


def split_csv(value: Any) -> Any:
    """Form fields arrive as "a, b, c"; JSON bodies already carry lists."""
    if isinstance(value, str):
        trimmed = value.strip()
        if trimmed.startswith("["):
            try:
                return json.loads(trimmed)
            except ValueError:
                pass
        return [part.strip() for part in trimmed.split(",") if part.strip()]
    return value


def parse_json_field(value: Any) -> Any:
    if isinstance(value, str):
        trimmed = value.strip()
        if trimmed.startswith("{") or trimmed.startswith("["):
            try:
                return json.loads(trimmed)
            except ValueError:
                return value
    return value


class AuthorOut(BaseModel):
    email: str


__all__ = [
    "AchievementCategory",
    "AchievementIcon",
    "AliasChoices",
    "Any",
    "AuthorOut",
    "BaseModel",
    "ConfigDict",
    "Dict",
    "EmailStr",
    "Field",
    "List",
    "Optional",
    "Role",
    "datetime",
    "field_validator",
    "parse_json_field",
    "split_csv",
]
