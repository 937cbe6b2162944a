"""Insert the studio's artists. Safe to run more than once.

Usage: python seed.py
"""

import asyncio
import logging

from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from database import async_session, init_db
from models import Artist

logger = logging.getLogger(__name__)

ARTISTS = [
    Artist(
        name="CRISTIANO",
        bio="Clean lines, blackwork and fine line.",
        avatar_url="/artists/cristiano.jpg",
    ),
    Artist(
        name="SDRAINS",
        bio="Realism and vibrant colour.",
        avatar_url="/artists/sdrains.jpg",
    ),
]


async def seed_artists(session: AsyncSession, artists=None) -> int:
    """Add every artist whose name is not taken yet; return how many were added."""
    artists = ARTISTS if artists is None else artists
    result = await session.execute(select(Artist.name))
    existing = set(result.scalars().all())

    added = 0
    for artist in artists:
        if artist.name in existing:
            continue
        session.add(Artist(name=artist.name, bio=artist.bio, avatar_url=artist.avatar_url,
                           instagram_url=artist.instagram_url))
        existing.add(artist.name)
        added += 1
    await session.commit()
    return added


async def main() -> None:
    await init_db()
    async with async_session() as session:
        added = await seed_artists(session)
    logger.info("Seeded %d artist(s)", added)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(main())
