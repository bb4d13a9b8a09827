from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from personal_expense.api.deps import get_session
from personal_expense.schemas.summary import SummaryOut, SummaryResponseOut
from personal_expense.services.summary import summarize
from personal_expense.services.transactions import LedgerPersistenceError

router = APIRouter(tags=["summary"])


@router.get("/summary", response_model=SummaryResponseOut)
async def get_summary(session: AsyncSession = Depends(get_session)) -> SummaryResponseOut:
    try:
        summary = await summarize(session)
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return SummaryResponseOut(
        data=SummaryOut(
            total_income=summary.total_income,
            total_expense=summary.total_expense,
            balance=summary.balance,
        )
    )
