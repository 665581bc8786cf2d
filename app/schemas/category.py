# app/schemas/category.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import CategoryType


# ---------- Category ----------
class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: CategoryType
    description: str | None = Field(None, max_length=500)


class CategoryCreate(CategoryBase):
    created_by: int


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    type: CategoryType | None = None
    description: str | None = Field(None, max_length=500)
    updated_by: int | None = None


class CategoryRead(CategoryBase):
    id: int
    created_by: int | None = None
    updated_by: int | None = None
    created_at: datetime
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


# ---------- Respuestas ----------
class CategoryMessage(BaseModel):
    message: str
    category: CategoryRead | None = None
