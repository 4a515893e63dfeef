from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from sqlalchemy import Executable
from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """A slice of a query result together with the total match count."""
    number: int
    size: int
    total_elements: int
    content: List[T] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0


class BaseRepository:
    """
    Base class for repositories providing common helpers.

    Note:
      Repositories never commit. Transaction boundaries belong to the service
      that owns the session (see ninja_api.services.base.BaseService).
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        return await self.session.execute(statement, params or {})

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return scalars."""
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return exactly one scalar."""
        result = await self.execute(statement, params)
        return result.scalar_one()

    async def scalar_one_or_none(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return a single scalar or None."""
        result = await self.execute(statement, params)
        return result.scalar_one_or_none()

    async def flush(self) -> None:
        """Flush pending changes so generated values become available."""
        await self.session.flush()

    async def add_all(self, entities: Iterable[Any]) -> None:
        """Add multiple entities to session."""
        self.session.add_all(list(entities))

    async def add(self, entity: Any) -> None:
        """Add a single entity to session."""
        self.session.add(entity)
