from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str


class CategoryListOut(BaseModel):
    message: str = "success"
    data: list[CategoryOut]


class CategoryDetailOut(BaseModel):
    message: str = "success"
    data: CategoryOut
