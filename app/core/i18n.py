"""Message bundles per language and namespace, resolved per request."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Protocol, runtime_checkable

from fastapi import Request

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class LocalizationContext(Protocol):
    def t(self, namespace: str) -> Mapping[str, str]:
        ...


@lru_cache(maxsize=64)
def _read_bundle(locales_dir: Path, lang: str, namespace: str) -> Mapping[str, str]:
    path = locales_dir / lang / f"{namespace}.json"
    if not path.is_file():
        return {}
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        logger.warning("Ignoring non-object bundle", extra={"path": str(path)})
        return {}
    return {str(key): str(value) for key, value in data.items()}


def load_bundle(lang: str, namespace: str) -> dict[str, str]:
    """Bundle for ``lang``; keys it lacks are filled from the default locale."""
    fallback = _read_bundle(settings.LOCALES_DIR, settings.DEFAULT_LOCALE, namespace)
    if lang == settings.DEFAULT_LOCALE:
        return dict(fallback)
    return {**fallback, **_read_bundle(settings.LOCALES_DIR, lang, namespace)}


class I18nContext:
    def __init__(self, lang: str | None = None):
        self.lang = lang or settings.DEFAULT_LOCALE

    def t(self, namespace: str) -> dict[str, str]:
        return load_bundle(self.lang, namespace)

    def __repr__(self) -> str:
        return f"I18nContext(lang={self.lang!r})"


def _match_locale(value: str | None) -> str | None:
    if not value:
        return None
    candidate = value.strip().lower().replace("_", "-")
    if candidate in settings.SUPPORTED_LOCALES:
        return candidate
    base = candidate.split("-", 1)[0]
    if base in settings.SUPPORTED_LOCALES:
        return base
    return None


def _parse_accept_language(header: str | None) -> list[str]:
    """Language tags ordered by their q-weight, highest first."""
    if not header:
        return []
    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        if not tag or tag == "*":
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        if quality > 0:
            weighted.append((-quality, index, tag))
    return [tag for _, _, tag in sorted(weighted)]


def resolve_language(request: Request) -> str:
    # Orden: ?lang=, cabecera x-lang, Accept-Language, idioma por defecto
    for candidate in (request.query_params.get("lang"), request.headers.get("x-lang")):
        matched = _match_locale(candidate)
        if matched:
            return matched
    for tag in _parse_accept_language(request.headers.get("accept-language")):
        matched = _match_locale(tag)
        if matched:
            return matched
    return settings.DEFAULT_LOCALE


def get_i18n(request: Request) -> I18nContext:
    """FastAPI dependency providing the request's localization context."""
    return I18nContext(resolve_language(request))
