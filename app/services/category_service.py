from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.db.operations import flush_async, refresh_async, rollback_async
from app.domain.results import Failed, Invalid, Ok, WriteResult
from app.models.category import Category
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.services.exceptions import ResourceNotFoundError
from app.services.normalizers import CategoryKey

logger = get_logger(__name__)

_NOT_NULL_FIELDS = ("name", "type")

# categories.id es INTEGER (int4 en PostgreSQL); LIMIT/OFFSET admiten bigint.
_ID_RANGE = range(-(2**31), 2**31)
_BIGINT_MAX = 2**63 - 1


def _validate(schema: type[BaseModel], payload: Any) -> BaseModel | None:
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    if not isinstance(payload, dict):
        return None
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        logger.info("Rejected category payload", extra={"errors": exc.errors(include_url=False)})
        return None


class CategoryService:
    """Persistencia de categorías sobre una AsyncSession.

    Solo hace flush; el commit queda a cargo del router.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_or_raise(self, category_id: CategoryKey, detail: str) -> Category:
        if isinstance(category_id, Invalid) or category_id not in _ID_RANGE:
            raise ResourceNotFoundError(detail)
        category = await self.db.get(Category, category_id)
        if category is None:
            raise ResourceNotFoundError(detail)
        return category

    async def _flush_or_fail(self, category: Category) -> WriteResult[Category]:
        try:
            await flush_async(self.db, category)
        except IntegrityError as exc:
            await rollback_async(self.db)
            logger.warning("Category write rejected by database", extra={"error": str(exc.orig)})
            return Failed("integrity_error")
        await refresh_async(self.db, category)
        return Ok(category)

    # ---------------- Lectura ----------------
    async def find_all(self, page: int, limit: int) -> tuple[Sequence[Category], int]:
        total = (await self.db.execute(select(func.count(Category.id)))).scalar_one()
        offset = (page - 1) * limit
        if offset > _BIGINT_MAX:
            # Ninguna fila puede estar tan lejos.
            return [], total

        stmt = (
            select(Category)
            .order_by(Category.created_at.desc(), Category.id.desc())
            .offset(offset)
            .limit(min(limit, _BIGINT_MAX))
        )
        rows = (await self.db.execute(stmt)).scalars().all()
        return rows, total

    async def find_one(self, category_id: CategoryKey) -> Category:
        return await self._get_or_raise(category_id, "Category not found")

    # ---------------- Escritura ----------------
    async def create(self, payload: Any) -> WriteResult[Category]:
        data = _validate(CategoryCreate, payload)
        if data is None:
            return Failed("invalid_payload")

        category = Category(**data.model_dump())
        self.db.add(category)
        return await self._flush_or_fail(category)

    async def update(self, category_id: CategoryKey, payload: Any) -> WriteResult[Category]:
        category = await self._get_or_raise(category_id, "Category to update not found")
        data = _validate(CategoryUpdate, payload)
        if data is None:
            return Failed("invalid_payload")

        changes = data.model_dump(exclude_unset=True)
        if any(field in changes and changes[field] is None for field in _NOT_NULL_FIELDS):
            return Failed("invalid_payload")
        for field, value in changes.items():
            setattr(category, field, value)

        return await self._flush_or_fail(category)

    async def remove(self, category_id: CategoryKey) -> Category:
        category = await self._get_or_raise(category_id, "Category to delete not found")
        await self.db.delete(category)
        await flush_async(self.db)
        return category
