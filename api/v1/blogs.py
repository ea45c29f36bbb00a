from api.v1.resource_router import build_resource_router
from services.resources import BLOGS


router = build_resource_router(BLOGS, prefix="/blogs", tag="Blogs")
