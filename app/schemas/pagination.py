# app/schemas/pagination.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List
from app.schemas.category import CategoryRead


class CategoryPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    categories: List[CategoryRead]
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    limit: int
    # Bundle "layout" para el título de la página.
    t: Dict[str, str] = Field(default_factory=dict)
