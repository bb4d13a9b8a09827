from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from personal_expense.api.deps import get_session
from personal_expense.schemas.transactions import (
    TransactionDeletedOut,
    TransactionDeleteMutationOut,
    TransactionIn,
    TransactionListOut,
    TransactionMutationOut,
    TransactionOut,
)
from personal_expense.services.transactions import (
    LedgerPersistenceError,
    MissingFieldError,
    TransactionFields,
    create_transaction as create_transaction_service,
    delete_transaction as delete_transaction_service,
    get_transaction as get_transaction_service,
    list_transactions as list_transactions_service,
    update_transaction as update_transaction_service,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _fields(payload: TransactionIn) -> TransactionFields:
    return TransactionFields(
        type=payload.type,
        category=payload.category,
        amount=payload.amount,
        date=payload.date,
        description=payload.description,
    )


def _parse_id(raw: str) -> int | None:
    # Ids that are not integers cannot match any row.
    try:
        return int(raw)
    except ValueError:
        return None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TransactionMutationOut)
async def create_transaction(
    payload: TransactionIn,
    session: AsyncSession = Depends(get_session),
) -> TransactionMutationOut:
    try:
        txn = await create_transaction_service(session, fields=_fields(payload))
    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return TransactionMutationOut(
        message="Transaction created successfully",
        data=TransactionOut.model_validate(txn),
    )


@router.get("", response_model=TransactionListOut)
async def list_transactions(session: AsyncSession = Depends(get_session)) -> TransactionListOut:
    try:
        rows = await list_transactions_service(session)
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return TransactionListOut(data=[TransactionOut.model_validate(r) for r in rows])


@router.get("/{txn_id}", response_model=TransactionMutationOut)
async def read_transaction(txn_id: str, session: AsyncSession = Depends(get_session)) -> TransactionMutationOut:
    parsed_id = _parse_id(txn_id)
    if parsed_id is None:
        raise HTTPException(status_code=404, detail=f"Transaction with ID {txn_id} not found")
    try:
        txn = await get_transaction_service(session, txn_id=parsed_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return TransactionMutationOut(message="success", data=TransactionOut.model_validate(txn))


@router.put("/{txn_id}", response_model=TransactionMutationOut)
async def update_transaction(
    txn_id: str,
    payload: TransactionIn,
    session: AsyncSession = Depends(get_session),
) -> TransactionMutationOut:
    parsed_id = _parse_id(txn_id)
    if parsed_id is None:
        raise HTTPException(status_code=404, detail={"message": "Transaction not found or no changes made", "data": None})
    try:
        txn = await update_transaction_service(session, txn_id=parsed_id, fields=_fields(payload))
    except MissingFieldError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except LookupError as e:
        raise HTTPException(status_code=404, detail={"message": str(e), "data": None}) from e
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return TransactionMutationOut(
        message="Transaction updated successfully",
        data=TransactionOut.model_validate(txn),
    )


@router.delete("/{txn_id}", response_model=TransactionDeleteMutationOut)
async def delete_transaction(
    txn_id: str,
    session: AsyncSession = Depends(get_session),
) -> TransactionDeleteMutationOut:
    parsed_id = _parse_id(txn_id)
    if parsed_id is None:
        raise HTTPException(status_code=404, detail={"message": "Transaction not found", "data": None})
    try:
        deleted_id = await delete_transaction_service(session, txn_id=parsed_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail={"message": str(e), "data": None}) from e
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return TransactionDeleteMutationOut(
        message="Transaction deleted successfully",
        data=TransactionDeletedOut(id=deleted_id),
    )
