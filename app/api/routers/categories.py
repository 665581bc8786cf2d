from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_category_handler, get_current_user
from app.core.i18n import I18nContext, get_i18n
from app.db.operations import commit_async
from app.db.session_async import get_async_db
from app.domain.results import MISSING
from app.schemas.category import CategoryCreate, CategoryMessage, CategoryRead, CategoryUpdate
from app.schemas.pagination import CategoryPage
from app.services.category_handler import CategoryHandler

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    dependencies=[Depends(get_current_user)],
)


def _present(value: str | None):
    # Un query param ausente cuenta como "no enviado", no como null.
    return MISSING if value is None else value


@router.post("", response_model=CategoryMessage, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    i18n: I18nContext = Depends(get_i18n),
    handler: CategoryHandler = Depends(get_category_handler),
    db: AsyncSession = Depends(get_async_db),
):
    response = await handler.create(payload, i18n)
    await commit_async(db)
    return response


@router.get("", response_model=CategoryPage)
async def list_categories(
    page: str | None = Query(None, description="Página (>= 1). Valores inválidos se tratan como 1."),
    limit: str | None = Query(None, description="Tamaño de página (>= 1). Por defecto 5."),
    i18n: I18nContext = Depends(get_i18n),
    handler: CategoryHandler = Depends(get_category_handler),
):
    return await handler.list_categories(_present(page), _present(limit), i18n)


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(
    category_id: str = Path(...),
    handler: CategoryHandler = Depends(get_category_handler),
):
    return await handler.find_one(category_id)


@router.patch("/{category_id}", response_model=CategoryMessage)
async def update_category(
    payload: CategoryUpdate,
    category_id: str = Path(...),
    i18n: I18nContext = Depends(get_i18n),
    handler: CategoryHandler = Depends(get_category_handler),
    db: AsyncSession = Depends(get_async_db),
):
    response = await handler.update(category_id, payload, i18n)
    await commit_async(db)
    return response


@router.delete("/{category_id}", response_model=CategoryMessage, response_model_exclude_none=True)
async def delete_category(
    category_id: str = Path(...),
    i18n: I18nContext = Depends(get_i18n),
    handler: CategoryHandler = Depends(get_category_handler),
    db: AsyncSession = Depends(get_async_db),
):
    response = await handler.remove(category_id, i18n)
    await commit_async(db)
    return response
