from __future__ import annotations

from pydantic import BaseModel


class SummaryOut(BaseModel):
    total_income: int
    total_expense: int
    balance: int


class SummaryResponseOut(BaseModel):
    message: str = "success"
    data: SummaryOut
