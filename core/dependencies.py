from typing import Optional

from fastapi import Request

from core.config import Settings
from core.database import Database
from services.r2_service import R2Storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_storage(request: Request) -> Optional[R2Storage]:
    return request.app.state.storage


def get_identity(request: Request):
    """The identity provider configured at startup, or None when Firebase is not set up."""
    return request.app.state.identity
