import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError

from core.database import Database
from core.dependencies import get_database, get_identity
from repositories.tables import User
from services.identity_service import IdentityError
from services.user_service import find_user_by_uid


logger = logging.getLogger(__name__)


def extract_bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization") or ""
    if not header.startswith("Bearer"):
        return None
    parts = header.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


async def require_auth(
    request: Request,
    database: Database = Depends(get_database),
    identity=Depends(get_identity),
) -> User:
    token = extract_bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized to access this route (no token provided)",
        )

    if identity is None:
        logger.warning("Rejecting authenticated request: identity provider not configured")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized to access this route (invalid token)",
        )

    try:
        claims = await identity.verify_token(token)
    except IdentityError:
        logger.warning("ID token verification failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized to access this route (invalid token)",
        )

    try:
        user = await find_user_by_uid(database, claims.uid)
    except SQLAlchemyError:
        logger.exception("User lookup failed for uid %s", claims.uid)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error during user lookup",
        )

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or not registered in backend",
        )

    request.state.user = user
    return user


def require_role(role: str):
    """Dependency factory: authenticates, then rejects users whose role differs from `role`."""

    async def check_role(user: User = Depends(require_auth)) -> User:
        if user.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {user.role} is not authorized to access this route",
            )
        return user

    return check_role


require_admin = require_role("admin")


async def optional_auth(
    request: Request,
    database: Database = Depends(get_database),
    identity=Depends(get_identity),
) -> Optional[User]:
    token = extract_bearer_token(request)
    if not token or identity is None:
        request.state.user = None
        return None

    try:
        claims = await identity.verify_token(token)
        user = await find_user_by_uid(database, claims.uid)
    except IdentityError:
        logger.warning("Optional auth: ID token invalid")
        user = None
    except SQLAlchemyError:
        logger.exception("Optional auth: user lookup failed")
        user = None

    request.state.user = user
    return user
