from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from core.config import Settings
from core.database import Database
from core.dependencies import get_database, get_settings, get_storage
from repositories.tables import User
from schemas.response_schema import APIResponse, ListQuery
from security.auth import optional_auth, require_admin
from services.resource_service import ResourceConfig, ResourceService
from services.upload_service import RequestPayload, read_payload


def service_dependency(config: ResourceConfig):
    """Builds a dependency that hands each request a ResourceService bound to `config`."""

    def get_service(
        database: Database = Depends(get_database),
        storage=Depends(get_storage),
    ) -> ResourceService:
        return ResourceService(config, database, storage)

    return get_service


def payload_dependency(config: ResourceConfig):
    async def get_payload(request: Request, settings: Settings = Depends(get_settings)) -> RequestPayload:
        return await read_payload(request, config.file_fields, settings.max_upload_bytes)

    return get_payload


def build_resource_router(config: ResourceConfig, prefix: str, tag: str, detail: bool = True) -> APIRouter:
    """
    Registers list, admin list, detail, create, update and delete routes for one resource.
    The admin list is registered before the detail route so "/admin/all" is never read as a key.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    get_service = service_dependency(config)
    get_payload = payload_dependency(config)
    out = config.out_schema

    # ------------------------------
    # List published items
    # ------------------------------
    @router.get("", response_model=APIResponse[list[out]], dependencies=[Depends(optional_auth)])
    async def list_items(
        query: Annotated[ListQuery, Query()],
        service: ResourceService = Depends(get_service),
    ):
        items, pagination = await service.list(query, published_only=True)
        return APIResponse(data=items, pagination=pagination)

    # ------------------------------
    # List everything (admin)
    # ------------------------------
    @router.get("/admin/all", response_model=APIResponse[list[out]], dependencies=[Depends(require_admin)])
    async def list_all_items(
        query: Annotated[ListQuery, Query()],
        service: ResourceService = Depends(get_service),
    ):
        items, pagination = await service.list(query, published_only=False)
        return APIResponse(data=items, pagination=pagination)

    if detail:

        @router.get("/{key}", response_model=APIResponse[out], dependencies=[Depends(optional_auth)])
        async def get_item(key: str, service: ResourceService = Depends(get_service)):
            item = await service.get_published(key)
            return APIResponse(data=item)

    # ------------------------------
    # Create
    # ------------------------------
    @router.post("", response_model=APIResponse[out], status_code=status.HTTP_201_CREATED)
    async def create_item(
        user: User = Depends(require_admin),
        payload: RequestPayload = Depends(get_payload),
        service: ResourceService = Depends(get_service),
    ):
        item = await service.create(payload, user)
        return APIResponse(data=item, message=f"{config.label} created successfully")

    # ------------------------------
    # Update (partial)
    # ------------------------------
    @router.put("/{item_id}", response_model=APIResponse[out], dependencies=[Depends(require_admin)])
    async def update_item(
        item_id: str,
        payload: RequestPayload = Depends(get_payload),
        service: ResourceService = Depends(get_service),
    ):
        item = await service.update(item_id, payload)
        return APIResponse(data=item, message=f"{config.label} updated successfully")

    # ------------------------------
    # Delete
    # ------------------------------
    @router.delete("/{item_id}", response_model=APIResponse[None], dependencies=[Depends(require_admin)])
    async def delete_item(item_id: str, service: ResourceService = Depends(get_service)):
        await service.delete(item_id)
        return APIResponse(message=f"{config.label} deleted successfully")

    return router
