from __future__ import annotations

import asyncio

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from personal_expense.config import get_settings
from personal_expense.db import Database
from personal_expense.logging_utils import get_logger
from personal_expense.models import Category
from personal_expense.services.categories import SEED_CATEGORIES

logger = get_logger(__name__)


async def seed_categories(session: AsyncSession) -> int:
    """Insert the predefined categories if none exist yet. Returns rows inserted."""
    existing = await session.scalar(select(func.count()).select_from(Category))
    if existing:
        return 0

    session.add_all(Category(name=name, type=cat_type) for name, cat_type in SEED_CATEGORIES)
    await session.commit()
    return len(SEED_CATEGORIES)


async def initialize(db: Database) -> bool:
    """
    Create the tables and seed the category registry.

    Failures are logged and reported through the return value; the caller
    keeps running since request paths only use free-form category ids.
    """
    try:
        await db.create_all()
        logger.info("Categories and transactions tables created or already exist")

        async with db.session() as session:
            inserted = await seed_categories(session)
    except SQLAlchemyError:
        logger.exception("Failed to initialize category registry")
        return False

    if inserted:
        logger.info("Predefined categories inserted: %d", inserted)
    return True


async def init_database(database_url: str | None = None) -> bool:
    db = Database(database_url or get_settings().database_url)
    await db.init()
    try:
        return await initialize(db)
    finally:
        await db.dispose()


def main() -> None:
    asyncio.run(init_database())


if __name__ == "__main__":
    main()
