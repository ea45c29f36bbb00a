import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from core.database import Database
from core.dependencies import get_database, get_identity
from schemas.admin import DashboardOut
from schemas.response_schema import APIResponse, ListQuery
from schemas.user import AdminSetupRequest, RoleUpdate, UserOut, UserSummary
from security.auth import require_admin
from services.dashboard_service import build_dashboard
from services.user_service import change_role, list_users, remove_user, setup_admin


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


# ------------------------------
# One-time admin bootstrap
# ------------------------------
@router.post("/setup", response_model=APIResponse[UserSummary], status_code=status.HTTP_201_CREATED)
async def setup(
    body: AdminSetupRequest,
    database: Database = Depends(get_database),
    identity=Depends(get_identity),
):
    """
    Creates the first admin, both in the identity provider and locally.
    Refuses once any admin exists. No session is issued: sign in, then call /api/auth/login.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create Firebase user",
        )
    user = await setup_admin(database, identity, body)
    return APIResponse(
        data=user,
        message="Admin created. Sign in with email/password, then call /api/auth/login.",
    )


@router.get("/dashboard", response_model=APIResponse[DashboardOut], dependencies=[Depends(require_admin)])
async def dashboard(database: Database = Depends(get_database)):
    try:
        data = await build_dashboard(database)
    except SQLAlchemyError:
        logger.exception("Dashboard queries failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error fetching counts",
        )
    return APIResponse(data=data)


# ------------------------------
# User management
# ------------------------------
@router.get("/users", response_model=APIResponse[list[UserOut]], dependencies=[Depends(require_admin)])
async def users(
    query: Annotated[ListQuery, Query()],
    database: Database = Depends(get_database),
):
    items, pagination = await list_users(database, query)
    return APIResponse(data=items, pagination=pagination)


@router.put("/users/{user_id}/role", response_model=APIResponse[UserSummary], dependencies=[Depends(require_admin)])
async def update_role(user_id: str, body: RoleUpdate, database: Database = Depends(get_database)):
    user = await change_role(database, user_id, body.role)
    return APIResponse(data=user, message="User role updated successfully")


@router.delete("/users/{user_id}", response_model=APIResponse[None], dependencies=[Depends(require_admin)])
async def delete_user(user_id: str, database: Database = Depends(get_database)):
    await remove_user(database, user_id)
    return APIResponse(message="User deleted successfully")
