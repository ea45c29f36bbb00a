from api.v1.resource_router import build_resource_router
from services.resources import PROJECTS


router = build_resource_router(PROJECTS, prefix="/projects", tag="Projects")
