from api.v1.resource_router import build_resource_router
from services.resources import SECTIONS


router = build_resource_router(SECTIONS, prefix="/sections", tag="Sections")
