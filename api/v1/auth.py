import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from core.database import Database
from core.dependencies import get_database, get_identity
from repositories.tables import User
from schemas.response_schema import APIResponse
from schemas.user import LoginRequest, LoginResponse, MeResponse, UserMe, UserSummary
from security.auth import require_auth
from services.identity_service import IdentityError
from services.user_service import sync_login


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# ------------------------------
# Exchange an ID token for the local user
# ------------------------------
@router.post("/login", response_model=LoginResponse)
async def login(
    body: Optional[LoginRequest] = None,
    database: Database = Depends(get_database),
    identity=Depends(get_identity),
):
    """
    Verifies the identity-provider ID token, then finds or registers the matching local user.
    New users always start with the "user" role.
    """
    token = body.token if body else None
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No Firebase ID token provided")
    if identity is None:
        logger.warning("Login attempted but the identity provider is not configured")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Firebase ID token")

    try:
        claims = await identity.verify_token(token)
    except IdentityError:
        logger.warning("Login rejected: invalid ID token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Firebase ID token")

    user = await sync_login(database, claims)
    return LoginResponse(user=UserSummary(id=user.id, email=user.email, role=user.role))


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(require_auth)):
    return MeResponse(user=UserMe(id=user.id, email=user.email, role=user.role, created_at=user.created_at))


@router.post("/logout", response_model=APIResponse[None])
async def logout():
    # Tokens live on the client; there is no server-side session to clear.
    return APIResponse(message="Logged out successfully")
