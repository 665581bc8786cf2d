"""Request handling for categories: normalize, delegate, shape the response.

The handler keeps no state between calls. It only originates two failures:
``BadRequestError`` when a write reports ``Failed`` and
``InvalidLocalizationContextError`` when a localized operation gets no usable
context. ``ResourceNotFoundError`` raised by the persistence layer passes
through untouched.
"""

from __future__ import annotations

import math
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Protocol, Sequence

from app.core.config import settings
from app.core.i18n import LocalizationContext
from app.core.logging import get_logger
from app.core.metrics import record_category_operation
from app.domain.results import MISSING, Ok
from app.services.exceptions import BadRequestError, ResourceNotFoundError
from app.services.normalizers import (
    CategoryKey,
    normalize_identifier,
    normalize_limit,
    normalize_page,
    require_localization,
)

logger = get_logger(__name__)

CATEGORY_NAMESPACE = "category"
LAYOUT_NAMESPACE = "layout"


class CategoryStore(Protocol):
    async def create(self, payload: Any) -> Any: ...

    async def find_all(self, page: int, limit: int) -> tuple[Sequence[Any], int]: ...

    async def find_one(self, category_id: CategoryKey) -> Any: ...

    async def update(self, category_id: CategoryKey, payload: Any) -> Any: ...

    async def remove(self, category_id: CategoryKey) -> Any: ...


def _message(bundle: Mapping[str, str], key: str) -> str:
    return bundle.get(key) or key


def _unwrap(result: Any) -> Any:
    return result.value if isinstance(result, Ok) else result


class CategoryHandler:
    def __init__(self, store: CategoryStore):
        self.store = store

    @asynccontextmanager
    async def _track(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except ResourceNotFoundError:
            record_category_operation(operation, "not_found")
            raise

    async def create(self, payload: Any, i18n: LocalizationContext) -> dict[str, Any]:
        require_localization(i18n)
        messages = i18n.t(CATEGORY_NAMESPACE)

        result = await self.store.create(payload)
        if not result:
            record_category_operation("create", "bad_request")
            logger.warning("Category creation failed", extra={"reason": getattr(result, "reason", None)})
            raise BadRequestError(_message(messages, "create_error"))

        category = _unwrap(result)
        record_category_operation("create", "success")
        logger.info("Category created", extra={"category_id": getattr(category, "id", None)})
        return {"message": _message(messages, "create_success"), "category": category}

    async def list_categories(
        self,
        page: Any = MISSING,
        limit: Any = MISSING,
        i18n: LocalizationContext | None = None,
    ) -> dict[str, Any]:
        require_localization(i18n)
        page = normalize_page(page, settings.CATEGORY_PAGE_DEFAULT)
        limit = normalize_limit(limit, settings.CATEGORY_LIMIT_DEFAULT)

        categories, total = await self.store.find_all(page, limit)
        record_category_operation("list", "success")
        return {
            "categories": list(categories),
            "currentPage": page,
            "totalPages": math.ceil(total / limit),
            "limit": limit,
            "t": dict(i18n.t(LAYOUT_NAMESPACE)),
        }

    async def find_one(self, category_id: Any = MISSING) -> Any:
        # Sin i18n: la respuesta es el registro tal cual.
        async with self._track("find_one"):
            category = await self.store.find_one(normalize_identifier(category_id))
        record_category_operation("find_one", "success")
        return category

    async def update(self, category_id: Any, payload: Any, i18n: LocalizationContext) -> dict[str, Any]:
        require_localization(i18n)
        messages = i18n.t(CATEGORY_NAMESPACE)
        key = normalize_identifier(category_id)

        async with self._track("update"):
            result = await self.store.update(key, payload)
        if not result:
            record_category_operation("update", "bad_request")
            logger.warning("Category update failed", extra={"category_id": repr(key)})
            raise BadRequestError(_message(messages, "update_error"))

        record_category_operation("update", "success")
        logger.info("Category updated", extra={"category_id": repr(key)})
        return {"message": _message(messages, "update_success"), "category": _unwrap(result)}

    async def remove(self, category_id: Any, i18n: LocalizationContext) -> dict[str, Any]:
        require_localization(i18n)
        messages = i18n.t(CATEGORY_NAMESPACE)
        key = normalize_identifier(category_id)

        async with self._track("remove"):
            await self.store.remove(key)
        record_category_operation("remove", "success")
        logger.info("Category removed", extra={"category_id": repr(key)})
        return {"message": _message(messages, "delete_success")}
