# ============================================================================
# USER SERVICE
# ============================================================================
# Local user records linked to identity-provider accounts: login sync, the
# one-time admin setup, and the admin-only user management actions.
# ============================================================================

import logging
from typing import Optional

from fastapi import HTTPException, status

from core.database import Database
from repositories.resource import count_rows, get_rows
from repositories.tables import User, utcnow
from repositories.user import (
    count_admins,
    create_user,
    delete_user,
    get_user_by_firebase_uid,
    get_user_by_id,
    update_user,
)
from schemas.imports import Role
from schemas.response_schema import ListQuery, Pagination
from schemas.user import AdminSetupRequest, UserOut, UserSummary
from services.identity_service import IdentityClaims, IdentityError


logger = logging.getLogger(__name__)


async def sync_login(database: Database, claims: IdentityClaims) -> User:
    """Finds or creates the local user for verified claims, then stamps last_login."""
    async with database.session() as session:
        user = await get_user_by_firebase_uid(session, claims.uid)
        if user is None:
            user = await create_user(
                session,
                {
                    "email": claims.email or f"{claims.uid}@unknown.local",
                    "firebase_uid": claims.uid,
                    "role": Role.USER.value,
                },
            )
            logger.info("Registered new user %s", user.id)
        elif claims.email and user.email != claims.email:
            user = await update_user(session, user.id, {"email": claims.email, "updated_at": utcnow()}) or user

        refreshed = await update_user(session, user.id, {"last_login": utcnow()})
        return refreshed or user


async def setup_admin(database: Database, identity, body: AdminSetupRequest) -> UserSummary:
    async with database.session() as session:
        if await count_admins(session) > 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Admin already exists. Use login instead.",
            )

    if not body.email or not body.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")

    try:
        provider_user = await identity.create_or_get_user(body.email, body.password)
    except IdentityError:
        logger.exception("Identity provider rejected admin setup for %s", body.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create Firebase user",
        )

    async with database.session() as session:
        existing = await get_user_by_firebase_uid(session, provider_user.uid)
        if existing is not None:
            user = await update_user(
                session, existing.id, {"role": Role.ADMIN.value, "email": body.email, "updated_at": utcnow()}
            )
        else:
            user = await create_user(
                session,
                {"email": body.email, "role": Role.ADMIN.value, "firebase_uid": provider_user.uid},
            )
        logger.info("Admin account created: %s", user.id)
        return UserSummary(id=user.id, email=user.email, role=user.role)


async def list_users(database: Database, query: ListQuery) -> tuple[list[UserOut], Pagination]:
    query = query.with_default_limit(10)
    async with database.session() as session:
        total = await count_rows(session, User)
        rows = await get_rows(
            session, User, order_by=[User.created_at.desc()], start=query.range_from, stop=query.range_to
        )
        items = [UserOut.model_validate(row, from_attributes=True) for row in rows]
    return items, Pagination.build(query.page, query.limit, total)


async def change_role(database: Database, user_id: str, role: str) -> UserSummary:
    if role not in {r.value for r in Role}:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role. Must be user or admin")

    async with database.session() as session:
        user = await get_user_by_id(session, user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        if user.role == Role.ADMIN.value and role != Role.ADMIN.value and await count_admins(session) <= 1:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot demote the last admin user")

        updated = await update_user(session, user_id, {"role": role, "updated_at": utcnow()})
        if updated is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return UserSummary(id=updated.id, email=updated.email, role=updated.role)


async def remove_user(database: Database, user_id: str) -> None:
    async with database.session() as session:
        user = await get_user_by_id(session, user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        if user.role == Role.ADMIN.value and await count_admins(session) <= 1:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete the last admin user")

        await delete_user(session, user_id)
        logger.info("User deleted: %s", user_id)


async def find_user_by_uid(database: Database, uid: str) -> Optional[User]:
    async with database.session() as session:
        return await get_user_by_firebase_uid(session, uid)

