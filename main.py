import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.v1.achievements import router as achievements_router
from api.v1.admin import router as admin_router
from api.v1.auth import router as auth_router
from api.v1.blogs import router as blogs_router
from api.v1.contact import router as contact_router
from api.v1.projects import router as projects_router
from api.v1.sections import router as sections_router
from core.config import Settings, load_settings
from core.database import Database
from core.errors import register_exception_handlers
from core.middleware import (
    BodySizeLimitMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
)
from services.identity_service import FirebaseIdentityProvider, initialize_firebase_app
from services.r2_service import R2Storage
from services.seed_service import seed_default_sections


logger = logging.getLogger(__name__)


def build_identity(settings: Settings) -> Optional[FirebaseIdentityProvider]:
    try:
        app = initialize_firebase_app(settings.firebase_service_account, settings.firebase_service_account_path)
    except ValueError as exc:
        logger.warning("Identity provider disabled: %s", exc)
        return None
    return FirebaseIdentityProvider(app)


def build_storage(settings: Settings) -> Optional[R2Storage]:
    if settings.r2 is None:
        logger.warning("Cloudflare R2 not configured; image uploads are disabled")
        return None
    return R2Storage(settings.r2)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    identity=None,
    storage: Optional[R2Storage] = None,
) -> FastAPI:
    """
    Builds the API. Collaborators that are not passed in are constructed from settings,
    so tests can hand in their own database, identity provider and storage.
    """
    settings = settings or load_settings()
    database = database or Database(settings.database_url)
    if identity is None:
        identity = build_identity(settings)
    if storage is None:
        storage = build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            await database.create_tables()
        if settings.seed_on_startup:
            await seed_default_sections(database)
        yield
        await database.dispose()

    app = FastAPI(title="Portfolio Site API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.identity = identity
    app.state.storage = storage

    # Starlette runs the last-added middleware first.
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    for router in (
        auth_router,
        blogs_router,
        projects_router,
        contact_router,
        achievements_router,
        admin_router,
        sections_router,
    ):
        app.include_router(router, prefix="/api")

    @app.get("/api/health", tags=["Health"])
    async def health():
        return {"status": "OK", "message": "Server is running"}

    return app


if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
