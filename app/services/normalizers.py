from __future__ import annotations

import re
from typing import Any

from app.domain.results import MISSING, Invalid, ParsedInt, Valid
from app.services.exceptions import InvalidLocalizationContextError

# "3" y "3.0" son enteros; "3.5" no.
_INT_RE = re.compile(r"([+-]?\d+)(?:\.0*)?")

CategoryKey = int | Invalid


def parse_int(value: Any) -> ParsedInt:
    if value is MISSING or value is None or isinstance(value, bool):
        return Invalid(value)
    if isinstance(value, int):
        return Valid(value)
    if isinstance(value, float):
        return Valid(int(value)) if value.is_integer() else Invalid(value)
    if isinstance(value, str):
        text = value.strip()
        match = _INT_RE.fullmatch(text)
        if match:
            try:
                return Valid(int(match.group(1)))
            except ValueError:
                # Más dígitos de los que int() acepta (sys.get_int_max_str_digits).
                return Invalid(value)
    return Invalid(value)


def normalize_identifier(value: Any) -> CategoryKey:
    """None becomes 0; anything unparseable is forwarded as ``Invalid``.

    No bounds check: the persistence layer decides what "not found" means.
    """
    if value is None:
        return 0
    parsed = parse_int(value)
    if isinstance(parsed, Valid):
        return parsed.value
    return parsed


def _normalize_positive(value: Any, default: int) -> int:
    if value is MISSING:
        return default
    parsed = parse_int(value)
    if isinstance(parsed, Valid) and parsed.value >= 1:
        return parsed.value
    return 1


def normalize_page(value: Any = MISSING, default: int = 1) -> int:
    return _normalize_positive(value, default)


def normalize_limit(value: Any = MISSING, default: int = 5) -> int:
    return _normalize_positive(value, default)


def require_localization(i18n: Any) -> None:
    if i18n is None or not callable(getattr(i18n, "t", None)):
        raise InvalidLocalizationContextError(i18n)
