from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from personal_expense.api.deps import get_session
from personal_expense.schemas.categories import CategoryDetailOut, CategoryListOut, CategoryOut
from personal_expense.services.categories import get_category, list_categories
from personal_expense.services.transactions import LedgerPersistenceError

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListOut)
async def read_categories(session: AsyncSession = Depends(get_session)) -> CategoryListOut:
    try:
        rows = await list_categories(session)
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return CategoryListOut(data=[CategoryOut.model_validate(c) for c in rows])


@router.get("/{category_id}", response_model=CategoryDetailOut)
async def read_category(category_id: int, session: AsyncSession = Depends(get_session)) -> CategoryDetailOut:
    try:
        row = await get_category(session, category_id=category_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return CategoryDetailOut(data=CategoryOut.model_validate(row))
