import logging

from repositories.tables import utcnow
from schemas.contact import ContactOut, ContactReply
from services.resource_service import ResourceService


logger = logging.getLogger(__name__)


async def reply_to_contact(service: ResourceService, contact_id: str, body: ContactReply) -> ContactOut:
    """Records an admin reply on a contact message and marks it read. Delivery happens outside the API."""
    await service.get_by_id(contact_id)
    contact = await service.set_fields(
        contact_id,
        {
            "reply_message": body.reply_message,
            "is_replied": True,
            "replied_at": utcnow(),
            "is_read": True,
        },
    )
    logger.info("Reply stored for contact %s", contact_id)
    return contact
