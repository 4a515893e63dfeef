from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy import ColumnElement, and_, delete, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from ninja_api.db.models.ninja import Ninja
from ninja_api.schemas.common import PageRequest, SortOrder
from .base import BaseRepository, Page


class NinjaRepository(BaseRepository):
    """
    Repository for the ninja table.

    Query-by-example is an explicit predicate builder: each non-null entry of
    the criteria mapping becomes an equality clause and clauses are AND-ed.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def insert(self, ninja: Ninja) -> Ninja:
        await self.add(ninja)
        await self.flush()
        await self.session.refresh(ninja)
        return ninja

    async def get_by_id(self, ninja_id: int) -> Optional[Ninja]:
        stmt = select(Ninja).where(Ninja.id == ninja_id)
        return await self.scalar_one_or_none(stmt)

    async def exists_by_id(self, ninja_id: int) -> bool:
        stmt = select(Ninja.id).where(Ninja.id == ninja_id)
        return (await self.scalar_one_or_none(stmt)) is not None

    async def query_by_example(self, criteria: Mapping[str, Any], page: PageRequest) -> Page[Ninja]:
        """
        Return one page of ninjas matching every non-null criteria entry.

        Parameters:
            criteria: attribute name -> value; None values impose no constraint
            page: page number, size and sort order
        Returns:
            Page with the records of the requested slice and the total match count.
        """
        predicates = _build_predicates(criteria)

        count_stmt = select(func.count()).select_from(Ninja)
        stmt = select(Ninja)
        if predicates:
            count_stmt = count_stmt.where(and_(*predicates))
            stmt = stmt.where(and_(*predicates))

        total = await self.scalar_one(count_stmt)
        stmt = stmt.order_by(*_build_order_by(page.sort)).offset(page.offset).limit(page.size)
        rows = await self.scalars(stmt)
        return Page(number=page.page, size=page.size, total_elements=total, content=list(rows))

    async def save(self, ninja: Ninja) -> Ninja:
        """Persist a record by id: attached instances are flushed, detached ones merged."""
        if ninja not in self.session:
            ninja = await self.session.merge(ninja)
        await self.flush()
        return ninja

    async def save_all(self, ninjas: Iterable[Ninja]) -> List[Ninja]:
        rows = list(ninjas)
        await self.add_all(rows)
        await self.flush()
        return rows

    async def delete(self, ninja: Ninja) -> None:
        await self.session.delete(ninja)
        await self.flush()

    async def delete_by_id(self, ninja_id: int) -> bool:
        result = await self.execute(delete(Ninja).where(Ninja.id == ninja_id))
        return result.rowcount > 0

    async def count(self) -> int:
        return await self.scalar_one(select(func.count()).select_from(Ninja))


def _column(name: str):
    if name not in inspect(Ninja).column_attrs:
        raise ValueError(f"Ninja has no attribute '{name}'")
    return getattr(Ninja, name)


def _build_predicates(criteria: Mapping[str, Any]) -> List[ColumnElement[bool]]:
    return [_column(name) == value for name, value in criteria.items() if value is not None]


def _build_order_by(sort: Iterable[SortOrder]) -> List[ColumnElement[Any]]:
    clauses: List[ColumnElement[Any]] = []
    for order in sort:
        column = _column(order.property)
        clauses.append(column.desc() if order.descending else column.asc())
    # id as the final tiebreaker keeps paging stable
    clauses.append(Ninja.id.asc())
    return clauses
