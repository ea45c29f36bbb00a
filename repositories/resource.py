# ============================================================================
# RESOURCE REPOSITORY
# ============================================================================
# Table-agnostic query helpers shared by every content resource. Each helper
# takes an open AsyncSession and the mapped class it should operate on.
# ============================================================================

import json
from typing import Any, Iterable, Optional, Sequence, Type

from sqlalchemy import String, cast, delete, func, inspect, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from core.database import Base


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_search_clause(model: Type[Base], columns: Iterable[str], term: str) -> ColumnElement[bool]:
    pattern = f"%{_escape_like(term)}%"
    return or_(*(getattr(model, column).ilike(pattern, escape="\\") for column in columns))


def build_contains_clause(model: Type[Base], column: str, value: str) -> ColumnElement[bool]:
    """Matches JSON list columns holding `value` as one of their string items."""
    needle = f"%{_escape_like(json.dumps(value))}%"
    return cast(getattr(model, column), String).like(needle, escape="\\")


async def count_rows(session: AsyncSession, model: Type[Base], where: Sequence[ColumnElement[bool]] = ()) -> int:
    stmt = select(func.count()).select_from(model)
    for clause in where:
        stmt = stmt.where(clause)
    result = await session.execute(stmt)
    return int(result.scalar_one())


async def get_rows(
    session: AsyncSession,
    model: Type[Base],
    where: Sequence[ColumnElement[bool]] = (),
    order_by: Sequence[Any] = (),
    start: int = 0,
    stop: Optional[int] = None,
) -> list[Any]:
    """Returns rows in the inclusive range [start, stop]."""
    stmt = select(model)
    for clause in where:
        stmt = stmt.where(clause)
    if order_by:
        stmt = stmt.order_by(*order_by)
    stmt = stmt.offset(start)
    if stop is not None:
        stmt = stmt.limit(max(stop - start + 1, 0))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_row(session: AsyncSession, model: Type[Base], refresh: bool = False, **filters: Any) -> Optional[Any]:
    stmt = select(model).filter_by(**filters).limit(1)
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalars().first()


async def create_row(session: AsyncSession, model: Type[Base], values: dict[str, Any]) -> Any:
    row = model(**values)
    session.add(row)
    await session.commit()
    return await get_row(session, model, refresh=True, id=row.id)


async def update_row(session: AsyncSession, model: Type[Base], row_id: str, values: dict[str, Any]) -> Optional[Any]:
    """Applies `values` to one row. Returns the refreshed row, or None when nothing matched."""
    result = await session.execute(
        update(model).where(model.id == row_id).values(**values).execution_options(synchronize_session=False)
    )
    await session.commit()
    if result.rowcount == 0:
        return None
    return await get_row(session, model, refresh=True, id=row_id)


async def delete_row(session: AsyncSession, model: Type[Base], row_id: str) -> bool:
    result = await session.execute(delete(model).where(model.id == row_id))
    await session.commit()
    return result.rowcount > 0


async def increment_column(session: AsyncSession, model: Type[Base], row_id: str, column: str, by: int = 1) -> None:
    target = getattr(model, column)
    await session.execute(
        update(model).where(model.id == row_id).values({column: target + by}).execution_options(synchronize_session=False)
    )
    await session.commit()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Flattens a mapped row into a dict keyed by column name, with the author embedded."""
    mapper = inspect(row).mapper
    data: dict[str, Any] = {}
    for attr in mapper.column_attrs:
        data[attr.columns[0].name] = getattr(row, attr.key)
    if "author" in mapper.relationships:
        author = row.author
        data["author"] = {"email": author.email} if author is not None else None
    return data
