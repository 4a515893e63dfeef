from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession


class BaseService:
    """
    Base class for services. Holds a session for use across multiple repositories.

    Services keep business logic and orchestration, delegating data access
    to repositories, and own the transaction boundary of each operation.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Run a read-write unit of work: commit when the block succeeds,
        roll back and re-raise on any exception.

        Usage:
            async with self.transaction():
                ...
        """
        try:
            yield self.session
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
