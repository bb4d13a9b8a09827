from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from personal_expense.models import Category
from personal_expense.services.transactions import LedgerPersistenceError

# Inserted once, the first time the categories table is found empty.
SEED_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Salary", "income"),
    ("Freelance", "income"),
    ("Groceries", "expense"),
    ("Rent", "expense"),
    ("Utilities", "expense"),
)


async def list_categories(session: AsyncSession) -> list[Category]:
    try:
        res = await session.execute(select(Category).order_by(Category.id.asc()))
    except SQLAlchemyError as e:
        raise LedgerPersistenceError(str(e)) from e
    return list(res.scalars().all())


async def get_category(session: AsyncSession, *, category_id: int) -> Category:
    try:
        row = (
            await session.execute(select(Category).where(Category.id == category_id).limit(1))
        ).scalar_one_or_none()
    except SQLAlchemyError as e:
        raise LedgerPersistenceError(str(e)) from e

    if row is None:
        raise LookupError(f"Category with ID {category_id} not found")
    return row
