from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.v1.resource_router import payload_dependency, service_dependency
from schemas.contact import ContactOut, ContactReply
from schemas.response_schema import APIResponse, ListQuery
from security.auth import require_admin
from services.contact_service import reply_to_contact
from services.resource_service import ResourceService
from services.resources import CONTACTS
from services.upload_service import RequestPayload


router = APIRouter(prefix="/contact", tags=["Contact"])

get_service = service_dependency(CONTACTS)
get_payload = payload_dependency(CONTACTS)


# ------------------------------
# Public submission
# ------------------------------
@router.post("", response_model=APIResponse[ContactOut], status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: RequestPayload = Depends(get_payload),
    service: ResourceService = Depends(get_service),
):
    item = await service.create(payload)
    return APIResponse(data=item, message="Contact message sent successfully")


@router.get("", response_model=APIResponse[list[ContactOut]], dependencies=[Depends(require_admin)])
async def list_contacts(
    query: Annotated[ListQuery, Query()],
    service: ResourceService = Depends(get_service),
):
    items, pagination = await service.list(query, published_only=False)
    return APIResponse(data=items, pagination=pagination)


@router.get("/{contact_id}", response_model=APIResponse[ContactOut], dependencies=[Depends(require_admin)])
async def get_contact(contact_id: str, service: ResourceService = Depends(get_service)):
    return APIResponse(data=await service.get_by_id(contact_id))


# ------------------------------
# Mark read / unread
# ------------------------------
@router.put("/{contact_id}", response_model=APIResponse[ContactOut], dependencies=[Depends(require_admin)])
async def update_contact(
    contact_id: str,
    payload: RequestPayload = Depends(get_payload),
    service: ResourceService = Depends(get_service),
):
    return APIResponse(data=await service.update(contact_id, payload))


@router.post("/{contact_id}/reply", response_model=APIResponse[ContactOut], dependencies=[Depends(require_admin)])
async def reply_contact(
    contact_id: str,
    body: ContactReply,
    service: ResourceService = Depends(get_service),
):
    """
    Stores the admin's reply on the message and marks it read.
    Sending the reply email is left to the admin's mail client.
    """
    item = await reply_to_contact(service, contact_id, body)
    return APIResponse(data=item, message="Reply saved successfully")


@router.delete("/{contact_id}", response_model=APIResponse[None], dependencies=[Depends(require_admin)])
async def delete_contact(contact_id: str, service: ResourceService = Depends(get_service)):
    await service.delete(contact_id)
    return APIResponse(message=f"{CONTACTS.label} deleted successfully")
