# ============================================================================
# RESOURCE SERVICE
# ============================================================================
# One service drives list/detail/create/update/delete for every content
# resource. A ResourceConfig says which table, schemas, ordering, filters and
# stored assets apply; the service raises HTTPException for the API layer.
# ============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Type

from fastapi import HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from core.database import Base, Database
from repositories.resource import (
    build_contains_clause,
    build_search_clause,
    count_rows,
    create_row,
    delete_row,
    get_row,
    get_rows,
    increment_column,
    row_to_dict,
    update_row,
)
from repositories.tables import User, utcnow
from schemas.response_schema import ListQuery, Pagination
from services.r2_service import R2Storage
from services.slug import generate_slug
from services.upload_service import RequestPayload, UploadedImage


logger = logging.getLogger(__name__)

FEATURED_IMAGE_FIELD = "featuredImage"
GALLERY_FIELD = "images"


@dataclass
class ResourceConfig:
    name: str
    label: str
    model: Type[Base]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    out_schema: Type[BaseModel]
    public_order: Callable[[], Sequence[Any]]
    admin_order: Callable[[], Sequence[Any]]
    lookup_field: Optional[str] = None
    slug_source: Optional[str] = None
    search_columns: tuple[str, ...] = ()
    tag_column: Optional[str] = None
    filter_columns: dict[str, str] = field(default_factory=dict)
    unique_fields: tuple[str, ...] = ()
    column_map: dict[str, str] = field(default_factory=dict)
    storage_folder: Optional[str] = None
    featured_image: bool = False
    gallery: bool = False
    max_gallery_images: int = 10
    tracks_published_at: bool = False
    counts_views: bool = False
    has_author: bool = True
    publishable: bool = True
    default_limit: int = 10

    @property
    def file_fields(self) -> dict[str, int]:
        fields: dict[str, int] = {}
        if self.featured_image:
            fields[FEATURED_IMAGE_FIELD] = 1
        if self.gallery:
            fields[GALLERY_FIELD] = self.max_gallery_images
        return fields

    def to_columns(self, values: dict[str, Any]) -> dict[str, Any]:
        return {self.column_map.get(key, key): value for key, value in values.items()}

    def is_nullable(self, key: str) -> bool:
        column = self.model.__mapper__.columns.get(self.column_map.get(key, key))
        return column is not None and bool(column.nullable)


class ResourceService:
    def __init__(self, config: ResourceConfig, database: Database, storage: Optional[R2Storage] = None):
        self.config = config
        self.database = database
        self.storage = storage

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _out(self, row: Any) -> BaseModel:
        return self.config.out_schema.model_validate(row_to_dict(row))

    def _not_found(self) -> HTTPException:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{self.config.label} not found")

    def _require_storage(self) -> R2Storage:
        if self.storage is None:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Cloudflare R2 environment variables not configured",
            )
        return self.storage

    async def _upload(self, image: UploadedImage) -> str:
        storage = self._require_storage()
        stored = await storage.upload(image.data, image.filename, image.content_type, self.config.storage_folder or "uploads")
        return stored.url

    async def _delete_asset(self, url: Optional[str]) -> None:
        if not url:
            return
        if self.storage is None:
            logger.warning("Object storage not configured; leaving %s in place", url)
            return
        key = self.storage.key_from_url(url)
        if not key:
            logger.warning("Skipping delete for URL outside the bucket: %s", url)
            return
        await self.storage.delete(key)

    def _where(self, query: ListQuery, published_only: bool) -> list[Any]:
        model = self.config.model
        where: list[Any] = []
        if published_only and self.config.publishable:
            where.append(model.is_published.is_(True))
        if query.search and self.config.search_columns:
            where.append(build_search_clause(model, self.config.search_columns, query.search))
        if query.tag and self.config.tag_column:
            where.append(build_contains_clause(model, self.config.tag_column, query.tag))
        for attr, column in self.config.filter_columns.items():
            value = getattr(query, attr, None)
            if value:
                where.append(getattr(model, column) == value)
        return where

    async def _check_unique(self, session, values: dict[str, Any], exclude_id: Optional[str] = None) -> None:
        for unique_field in self.config.unique_fields:
            if unique_field not in values:
                continue
            existing = await get_row(session, self.config.model, **{unique_field: values[unique_field]})
            if existing is not None and existing.id != exclude_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{self.config.label} with this {unique_field} already exists",
                )

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------
    async def list(self, query: ListQuery, published_only: bool = True) -> tuple[list[BaseModel], Pagination]:
        query = query.with_default_limit(self.config.default_limit)
        where = self._where(query, published_only)
        order = self.config.public_order() if published_only else self.config.admin_order()
        async with self.database.session() as session:
            total = await count_rows(session, self.config.model, where)
            rows = await get_rows(session, self.config.model, where, order, query.range_from, query.range_to)
            items = [self._out(row) for row in rows]
        return items, Pagination.build(query.page, query.limit, total)

    async def get_published(self, key: str) -> BaseModel:
        """Public detail lookup by slug or name; unpublished rows are reported as missing."""
        filters: dict[str, Any] = {self.config.lookup_field or "id": key}
        if self.config.publishable:
            filters["is_published"] = True
        async with self.database.session() as session:
            row = await get_row(session, self.config.model, **filters)
            if row is None:
                raise self._not_found()
            item = self._out(row)
            if self.config.counts_views:
                try:
                    await increment_column(session, self.config.model, row.id, "views")
                    item.views = item.views + 1
                except SQLAlchemyError:
                    logger.exception("View count update failed for %s %s", self.config.name, row.id)
        return item

    async def get_by_id(self, row_id: str) -> BaseModel:
        async with self.database.session() as session:
            row = await get_row(session, self.config.model, id=row_id)
            if row is None:
                raise self._not_found()
            return self._out(row)

    async def create(self, payload: RequestPayload, user: Optional[User] = None) -> BaseModel:
        data = self.config.create_schema.model_validate(payload.fields)
        values = data.model_dump(mode="json")

        if self.config.slug_source:
            values["slug"] = generate_slug(values[self.config.slug_source])
        if self.config.tracks_published_at:
            values["published_at"] = utcnow() if values.get("is_published") else None
        if self.config.has_author and user is not None:
            values["author_id"] = user.id

        async with self.database.session() as session:
            await self._check_unique(session, values)

            featured = payload.first_file(FEATURED_IMAGE_FIELD) if self.config.featured_image else None
            if featured is not None:
                values["featured_image_url"] = await self._upload(featured)
            if self.config.gallery and payload.files.get(GALLERY_FIELD):
                values["images"] = [await self._upload(image) for image in payload.files[GALLERY_FIELD]]

            row = await create_row(session, self.config.model, self.config.to_columns(values))
            logger.info("%s created: %s", self.config.label, row.id)
            return self._out(row)

    async def update(self, row_id: str, payload: RequestPayload) -> BaseModel:
        async with self.database.session() as session:
            existing = await get_row(session, self.config.model, id=row_id)
            if existing is None:
                raise self._not_found()

            data = self.config.update_schema.model_validate(payload.fields)
            # Null clears a nullable column; for required columns it means "leave as is".
            values = {
                key: value
                for key, value in data.model_dump(mode="json", exclude_unset=True).items()
                if value is not None or self.config.is_nullable(key)
            }
            await self._check_unique(session, values, exclude_id=row_id)

            if self.config.slug_source and self.config.slug_source in values:
                values["slug"] = generate_slug(values[self.config.slug_source])

            if self.config.tracks_published_at and "is_published" in values:
                if values["is_published"] and not existing.is_published:
                    values["published_at"] = utcnow()
                elif not values["is_published"]:
                    values["published_at"] = None

            featured = payload.first_file(FEATURED_IMAGE_FIELD) if self.config.featured_image else None
            if featured is not None:
                await self._delete_asset(existing.featured_image_url)
                values["featured_image_url"] = await self._upload(featured)
            elif "featured_image_url" in values and values["featured_image_url"] != existing.featured_image_url:
                await self._delete_asset(existing.featured_image_url)

            if self.config.gallery and payload.files.get(GALLERY_FIELD):
                for url in existing.images or []:
                    await self._delete_asset(url)
                values["images"] = [await self._upload(image) for image in payload.files[GALLERY_FIELD]]

            values["updated_at"] = utcnow()
            row = await update_row(session, self.config.model, row_id, self.config.to_columns(values))
            if row is None:
                raise self._not_found()
            return self._out(row)

    async def set_fields(self, row_id: str, values: dict[str, Any]) -> BaseModel:
        """Writes server-computed fields (no request validation) and bumps updated_at."""
        async with self.database.session() as session:
            row = await update_row(session, self.config.model, row_id, {**values, "updated_at": utcnow()})
            if row is None:
                raise self._not_found()
            return self._out(row)

    async def delete(self, row_id: str) -> None:
        async with self.database.session() as session:
            existing = await get_row(session, self.config.model, id=row_id)
            if existing is None:
                raise self._not_found()

            if self.config.featured_image:
                await self._delete_asset(existing.featured_image_url)
            if self.config.gallery:
                for url in existing.images or []:
                    await self._delete_asset(url)

            await delete_row(session, self.config.model, row_id)
            logger.info("%s deleted: %s", self.config.label, row_id)
