from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from personal_expense.logging_utils import get_logger
from personal_expense.models import Transaction

logger = get_logger(__name__)

REQUIRED_FIELDS = ("type", "category", "amount", "date")
MISSING_FIELDS_MESSAGE = "Invalid request: type, category, amount, and date are required."


class MissingFieldError(ValueError):
    def __init__(self, missing: list[str]):
        super().__init__(MISSING_FIELDS_MESSAGE)
        self.missing = missing


class LedgerPersistenceError(RuntimeError):
    pass


@dataclass
class TransactionFields:
    type: str | None = None
    category: int | None = None
    amount: int | None = None
    date: date | None = None
    description: str | None = None

    def missing(self) -> list[str]:
        # None means absent; zero amounts and category ids are real values.
        return [name for name in REQUIRED_FIELDS if getattr(self, name) is None]


def require_fields(fields: TransactionFields) -> None:
    missing = fields.missing()
    if missing:
        raise MissingFieldError(missing)


async def create_transaction(session: AsyncSession, *, fields: TransactionFields) -> Transaction:
    require_fields(fields)

    txn = Transaction(**asdict(fields))
    try:
        session.add(txn)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Failed to create transaction: %s", e)
        raise LedgerPersistenceError(str(e)) from e

    logger.info("Created transaction %s (%s %s)", txn.id, txn.type, txn.amount)
    return txn


async def list_transactions(session: AsyncSession) -> list[Transaction]:
    try:
        res = await session.execute(select(Transaction).order_by(Transaction.id.asc()))
    except SQLAlchemyError as e:
        logger.error("Failed to list transactions: %s", e)
        raise LedgerPersistenceError(str(e)) from e
    return list(res.scalars().all())


async def get_transaction(session: AsyncSession, *, txn_id: int) -> Transaction:
    try:
        txn = (
            await session.execute(select(Transaction).where(Transaction.id == txn_id).limit(1))
        ).scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error("Failed to load transaction %s: %s", txn_id, e)
        raise LedgerPersistenceError(str(e)) from e

    if txn is None:
        raise LookupError(f"Transaction with ID {txn_id} not found")
    return txn


async def update_transaction(
    session: AsyncSession,
    *,
    txn_id: int,
    fields: TransactionFields,
) -> Transaction:
    """
    Replace every mutable field of one transaction.

    Returns the submitted values merged with ``txn_id``; the row is not
    re-read after the write.
    """
    require_fields(fields)

    try:
        res = await session.execute(
            update(Transaction)
            .where(Transaction.id == txn_id)
            .values(**asdict(fields))
        )
        if res.rowcount == 0:
            await session.rollback()
            raise LookupError("Transaction not found or no changes made")
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Failed to update transaction %s: %s", txn_id, e)
        raise LedgerPersistenceError(str(e)) from e

    logger.info("Updated transaction %s", txn_id)
    return Transaction(id=txn_id, **asdict(fields))


async def delete_transaction(session: AsyncSession, *, txn_id: int) -> int:
    try:
        res = await session.execute(delete(Transaction).where(Transaction.id == txn_id))
        if res.rowcount == 0:
            await session.rollback()
            raise LookupError("Transaction not found")
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Failed to delete transaction %s: %s", txn_id, e)
        raise LedgerPersistenceError(str(e)) from e

    logger.info("Deleted transaction %s", txn_id)
    return txn_id
