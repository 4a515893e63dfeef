"""
Database seeding with the reference ninjas.

Seeds (only when the ninja table is empty):
- Naruto Uzumaki
- Sasuke Uchiha
- Sakura Haruno
- Gaara

Usage:
  python -m ninja_api.db.run_migrations upgrade head
  python -m ninja_api.db.seed
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ninja_api.db.models.ninja import Ninja
from ninja_api.db.session import get_async_session
from ninja_api.repositories.ninja import NinjaRepository

logger = logging.getLogger(__name__)


def reference_ninjas() -> List[Ninja]:
    """Fresh, unsaved instances of the reference records."""
    return [
        Ninja(
            name="Naruto Uzumaki",
            village="Konoha",
            clan="Uzumaki",
            rank="Kage",
            chakra_type="Wind",
            specialty="Ninjutsu",
            bloodline_trait="Kurama (Tailed Beast)",
            status="Active",
            strength_level=98,
            registration_date=date(2024, 1, 1),
        ),
        Ninja(
            name="Sasuke Uchiha",
            village="Konoha",
            clan="Uchiha",
            rank="Jounin",
            chakra_type="Lightning",
            specialty="Ninjutsu",
            bloodline_trait="Sharingan",
            status="Active",
            strength_level=97,
            registration_date=date(2024, 1, 1),
        ),
        Ninja(
            name="Sakura Haruno",
            village="Konoha",
            clan="Haruno",
            rank="Jounin",
            chakra_type="Earth",
            specialty="Medical Ninjutsu",
            status="Active",
            strength_level=85,
            registration_date=date(2024, 1, 1),
        ),
        Ninja(
            name="Gaara",
            village="Suna",
            rank="Kage",
            chakra_type="Wind",
            specialty="Sand Manipulation",
            bloodline_trait="Shukaku (Tailed Beast)",
            status="Active",
            strength_level=92,
            registration_date=date(2024, 1, 1),
        ),
    ]


# PUBLIC_INTERFACE
async def seed_ninjas(session: AsyncSession) -> int:
    """
    Insert the reference ninjas when the table is empty.

    Returns:
        Number of records inserted (0 when data already exists).
    """
    repo = NinjaRepository(session)
    existing = await repo.count()
    if existing:
        logger.info("Ninja table already has %s record(s); skipping seed.", existing)
        return 0
    rows = await repo.save_all(reference_ninjas())
    await session.commit()
    logger.info("Seeded %s ninja(s).", len(rows))
    return len(rows)


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """Seed the database using a standalone session."""
    async for session in get_async_session():
        await seed_ninjas(session)


if __name__ == "__main__":
    asyncio.run(seed_all())
