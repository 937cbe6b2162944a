import logging
import os
from typing import AsyncIterator

from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# 1. Load environment variables from .env file
load_dotenv()

# 2. Get the URL. If it's not found, raise an error to fail fast.
DATABASE_URL = os.environ.get("DATABASE_URL")

if not DATABASE_URL:
    raise ValueError("DATABASE_URL is not set. Please check your .env file.")

DATABASE_ECHO = os.environ.get("DATABASE_ECHO", "false").lower() == "true"

# 3. Create the Async Engine
engine = create_async_engine(DATABASE_URL, echo=DATABASE_ECHO, future=True)


def make_sessionmaker(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


async_session = make_sessionmaker(engine)


async def init_db(bind: AsyncEngine = engine) -> None:
    async with bind.begin() as conn:
        # This creates the tables if they don't exist
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ready")


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session
