"""Loads the event and school catalog into the database."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.event import Event
from ..models.school import School
from ..seed_data import EVENTS, SCHOOLS

logger = logging.getLogger(__name__)


async def seed_catalog(db: AsyncSession) -> int:
    """
    Insert catalog events and schools that are not present yet.

    Existing rows are left untouched, so attendance counts survive restarts.

    Returns:
        Number of rows inserted
    """
    existing_events = set((await db.execute(select(Event.id))).scalars().all())
    existing_schools = set((await db.execute(select(School.id))).scalars().all())

    inserted = 0
    for data in EVENTS:
        if data["id"] not in existing_events:
            db.add(Event(**data))
            inserted += 1

    for data in SCHOOLS:
        if data["id"] not in existing_schools:
            db.add(School(**data))
            inserted += 1

    if inserted:
        await db.commit()
        logger.info("Catalog seeded", extra={"inserted": inserted})
    else:
        logger.info("Catalog already present, skipping seed")

    return inserted
