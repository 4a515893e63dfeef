from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ninja_api.core.errors import NotFoundError
from ninja_api.db.models.ninja import Ninja
from ninja_api.repositories.base import Page
from ninja_api.repositories.ninja import NinjaRepository
from ninja_api.schemas.common import PageRequest
from ninja_api.schemas.ninja import NinjaCreate, NinjaQuery, NinjaUpdate
from ninja_api.services import mapper
from ninja_api.services.base import BaseService

logger = logging.getLogger(__name__)


class NinjaService(BaseService):
    """
    Domain service for the ninja registry.

    Write operations run in a single transaction that is rolled back on any
    failure; reads issue no commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NinjaRepository(session)

    # PUBLIC_INTERFACE
    async def create(self, request: NinjaCreate) -> Ninja:
        """
        Persist a new ninja.

        Returns:
            The stored record, including its generated id and storage defaults.
        """
        async with self.transaction():
            ninja = await self.repo.insert(mapper.create_to_record(request))
        logger.info("Created ninja id=%s", ninja.id)
        return ninja

    # PUBLIC_INTERFACE
    async def find_by_id(self, ninja_id: int) -> Ninja:
        """
        Return the ninja with the given id.

        Raises:
            NotFoundError: no record has this id.
        """
        return await self._get_or_raise(ninja_id)

    # PUBLIC_INTERFACE
    async def search(self, query: NinjaQuery, page: PageRequest) -> Page[Ninja]:
        """Return one page of ninjas matching every non-null filter field."""
        return await self.repo.query_by_example(mapper.query_to_criteria(query), page)

    # PUBLIC_INTERFACE
    async def update(self, ninja_id: int, request: NinjaUpdate) -> Ninja:
        """
        Merge the non-null request fields onto an existing ninja.

        Raises:
            NotFoundError: no record has this id; nothing is written.
        """
        async with self.transaction():
            ninja = await self._get_or_raise(ninja_id)
            ninja = await self.repo.save(mapper.merge_into_record(request, ninja))
        logger.info("Updated ninja id=%s", ninja_id)
        return ninja

    # PUBLIC_INTERFACE
    async def delete(self, ninja_id: int) -> None:
        """
        Remove a ninja.

        Raises:
            NotFoundError: no record has this id; nothing is deleted.
        """
        async with self.transaction():
            ninja = await self._get_or_raise(ninja_id)
            await self.repo.delete(ninja)
        logger.info("Deleted ninja id=%s", ninja_id)

    async def _get_or_raise(self, ninja_id: int) -> Ninja:
        ninja = await self.repo.get_by_id(ninja_id)
        if ninja is None:
            raise NotFoundError(f"Not found registry with code {ninja_id}")
        return ninja
