from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.resource import create_row, delete_row, get_row, get_rows, update_row
from repositories.tables import User


async def get_user_by_firebase_uid(session: AsyncSession, uid: str) -> Optional[User]:
    return await get_row(session, User, firebase_uid=uid)


async def get_user_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
    return await get_row(session, User, id=user_id)


async def get_first_user(session: AsyncSession) -> Optional[User]:
    rows = await get_rows(session, User, order_by=[User.created_at.asc()], start=0, stop=0)
    return rows[0] if rows else None


async def count_admins(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(User).where(User.role == "admin"))
    return int(result.scalar_one())


async def create_user(session: AsyncSession, values: dict[str, Any]) -> User:
    return await create_row(session, User, values)


async def update_user(session: AsyncSession, user_id: str, values: dict[str, Any]) -> Optional[User]:
    return await update_row(session, User, user_id, values)


async def delete_user(session: AsyncSession, user_id: str) -> bool:
    return await delete_row(session, User, user_id)
