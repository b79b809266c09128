"""
Database initialization script

Creates the tables from the ORM metadata and, with --seed, a demo user with
a few videos. Run this script to set up the database for the first time.
"""
import argparse
import asyncio
import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vidmeta.auth.dependencies import security_service
from vidmeta.cache.cache_service import get_video_cache
from vidmeta.config import settings
from vidmeta.database.connection import async_session_maker, close_db, engine
from vidmeta.database.models import BaseModel
from vidmeta.database.repositories.user_repository import UserRepository
from vidmeta.database.repositories.video_repository import VideoRepository
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"
DEMO_VIDEOS = [
    {"title": "Intro", "duration": 30, "genre": "demo", "tags": ["intro", "short"]},
    {"title": "Walkthrough", "duration": 600, "genre": "tutorial", "tags": ["long"]},
    {"title": "Outro", "duration": 15, "genre": "demo", "tags": ["short"]},
]


async def create_tables():
    """
    Create all database tables

    Tables are created from the SQLAlchemy models; existing tables are kept.
    """
    logger.info("Creating database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
    logger.info("Database tables created successfully!")


async def seed_demo_data():
    """
    Create the demo user and its videos (skipped if the user exists)
    """
    async with async_session_maker() as session:
        user_repo = UserRepository(session)
        if await user_repo.get_by_email(DEMO_EMAIL):
            logger.info("Demo user already exists. Skipping seed.")
            return

        user = await user_repo.create(
            email=DEMO_EMAIL,
            hashed_password=security_service.hash_password(DEMO_PASSWORD),
            name="Demo",
        )
        video_repo = VideoRepository(session)
        for video in DEMO_VIDEOS:
            await video_repo.create(user_id=user.id, **video)
        await session.commit()

    # новые строки должны быть видны в списках сразу
    await get_video_cache().invalidate_all()
    logger.info(f"Demo user created: {DEMO_EMAIL} / {DEMO_PASSWORD}")


async def init_database(seed: bool):
    """
    Initialize the database with tables and optional demo data
    """
    logger.info("Starting database initialization...")
    logger.info(f"Database URL: {settings.DATABASE_URL}")
    try:
        await create_tables()
        if seed:
            await seed_demo_data()
    finally:
        await close_db()
    logger.info("Database initialization completed successfully!")


def main():
    """
    Main entry point for database initialization
    """
    parser = argparse.ArgumentParser(description="Initialize the video metadata database")
    parser.add_argument("--seed", action="store_true", help="create a demo user with videos")
    args = parser.parse_args()
    asyncio.run(init_database(args.seed))


if __name__ == "__main__":
    main()
