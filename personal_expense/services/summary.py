from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from personal_expense.logging_utils import get_logger
from personal_expense.models import Transaction
from personal_expense.services.transactions import LedgerPersistenceError

logger = get_logger(__name__)


@dataclass(frozen=True)
class LedgerSummary:
    total_income: int = 0
    total_expense: int = 0

    @property
    def balance(self) -> int:
        return self.total_income - self.total_expense


async def summarize(session: AsyncSession) -> LedgerSummary:
    """Sum amounts per transaction type over the whole ledger."""
    q = (
        select(Transaction.type, func.coalesce(func.sum(Transaction.amount), 0))
        .group_by(Transaction.type)
    )
    try:
        rows = (await session.execute(q)).all()
    except SQLAlchemyError as e:
        logger.error("Failed to compute summary: %s", e)
        raise LedgerPersistenceError(str(e)) from e

    totals = {txn_type: int(total) for txn_type, total in rows}
    return LedgerSummary(
        total_income=totals.get("income", 0),
        total_expense=totals.get("expense", 0),
    )
