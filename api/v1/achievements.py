from api.v1.resource_router import build_resource_router
from services.resources import ACHIEVEMENTS


# Achievements are only ever shown as a list, so there is no detail route.
router = build_resource_router(ACHIEVEMENTS, prefix="/achievements", tag="Achievements", detail=False)
