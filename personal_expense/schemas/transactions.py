from __future__ import annotations

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class TransactionIn(BaseModel):
    # Every field is optional at the schema level; presence is checked by the
    # ledger service so missing fields surface as a single 400 message.
    type: Optional[Literal["income", "expense"]] = None
    category: Optional[int] = None
    amount: Optional[int] = None
    date: Optional[datetime.date] = None
    description: Optional[str] = None

    @field_validator("type", "category", "amount", "date", mode="before")
    @classmethod
    def blank_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    category: Optional[int]
    amount: int
    date: datetime.date
    description: Optional[str] = None


class TransactionMutationOut(BaseModel):
    message: str
    data: TransactionOut


class TransactionListOut(BaseModel):
    message: str = "success"
    data: list[TransactionOut]


class TransactionDeletedOut(BaseModel):
    id: int


class TransactionDeleteMutationOut(BaseModel):
    message: str
    data: TransactionDeletedOut
